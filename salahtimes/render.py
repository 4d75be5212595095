from .methods import method_name

DEFAULT_TITLE = "Prayer Times"
DEFAULT_FORMAT = "{next_name} {next_time} - {countdown}"


def format_time(dt, format_24h):
    if format_24h:
        return dt.strftime("%H:%M")
    return dt.strftime("%I:%M %p").lstrip("0")


def format_countdown(delta):
    total_minutes = int(delta.total_seconds() // 60)
    if total_minutes < 0:
        total_minutes = 0
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h{minutes:02d}"
    return f"{minutes}m"


def widget_title(prefs):
    return prefs.city or DEFAULT_TITLE


def render_list(prayers, prefs, today, format_24h=True):
    lines = [f"{widget_title(prefs)} - {today.strftime('%a %d %b %Y')}"]
    if not prayers:
        lines.append("Prayer times unavailable")
        return lines
    for prayer in prayers:
        marker = "  <- next" if prayer.is_next else ""
        lines.append(f"{prayer.name:<8}{format_time(prayer.time, format_24h)}{marker}")
    return lines


def render_widget(prayers, prefs, now, format_24h=True, display_format=DEFAULT_FORMAT):
    """Waybar payload for today's schedule."""
    header = f"{widget_title(prefs)} ({method_name(prefs.calculation_method)})"
    if not prayers:
        return {
            "text": "Prayer times unavailable",
            "tooltip": header,
            "class": "prayertimes-unavailable"
        }

    tooltip = "\n".join([header] + render_list(prayers, prefs, now, format_24h)[1:])
    upcoming = next((p for p in prayers if p.is_next), None)
    if upcoming is None:
        last = prayers[-1]
        return {
            "text": f"{last.name} {format_time(last.time, format_24h)}",
            "tooltip": tooltip,
            "class": "prayertimes-done"
        }

    text = display_format.format(
        next_name=upcoming.name,
        next_time=format_time(upcoming.time, format_24h),
        countdown=format_countdown(upcoming.time - now),
    )
    return {
        "text": text,
        "tooltip": tooltip,
        "class": "prayertimes"
    }
