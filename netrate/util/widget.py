from collections import OrderedDict
from dataclasses import asdict

from netrate import glyphs
from netrate.data.network_rates import NetworkRates, NetworkWidget, WidgetItem
from netrate.util import conversion, wtime

NO_IP = "—"


def build_network_widget(rates: NetworkRates, ip: str | None) -> NetworkWidget:
    return NetworkWidget(
        items=[
            WidgetItem(
                icon="download",
                subtext="Down",
                text=conversion.format_rate(rates.rx_per_sec),
            ),
            WidgetItem(
                icon="upload",
                subtext="Up",
                text=conversion.format_rate(rates.tx_per_sec),
            ),
            WidgetItem(icon="network", subtext="IP", text=ip or NO_IP),
        ],
        updated=wtime.get_human_timestamp(),
    )


def widget_to_dict(widget: NetworkWidget) -> dict[str, object]:
    """
    Return the widget in its wire shape, without the local "updated" field.
    """
    data = asdict(widget)
    del data["updated"]
    return data


def generate_tooltip(widget: NetworkWidget) -> str:
    tooltip: list[str] = []
    tooltip_od: OrderedDict[str, str] = OrderedDict()

    for item in widget.items:
        tooltip_od[item.subtext] = item.text

    max_key_length = 0
    for key in tooltip_od.keys():
        max_key_length = len(key) if len(key) > max_key_length else max_key_length

    for key, value in tooltip_od.items():
        tooltip.append(f"{key:{max_key_length}} : {value}")

    if len(tooltip) > 0 and widget.updated:
        tooltip.append("")
        tooltip.append(f"Last updated {widget.updated}")

    return "\n".join(tooltip)


def render_output(widget: NetworkWidget) -> tuple[str, str, str]:
    """
    Render a widget as the waybar (text, class, tooltip) triple.
    """
    items = {item.icon: item for item in widget.items}
    down = items["download"].text if "download" in items else conversion.format_rate(0)
    up = items["upload"].text if "upload" in items else conversion.format_rate(0)
    ip = items["network"].text if "network" in items else NO_IP

    icon = glyphs.md_network if ip != NO_IP else glyphs.md_network_off
    text = f"{icon}{glyphs.icon_spacer}{glyphs.cod_arrow_small_down}{down} {glyphs.cod_arrow_small_up}{up}"
    output_class = "success" if ip != NO_IP else "disconnected"

    return text, output_class, generate_tooltip(widget=widget)
