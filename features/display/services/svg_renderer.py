import logging
import math
from datetime import datetime, tzinfo
from pathlib import Path
from typing import List, Optional, Sequence

from lxml import etree

from features.common.exceptions.weather_exceptions import (
    RenderError,
    TemplateNotFoundError,
    TemplateStructureError
)
from features.weather.models.alert_types import WeatherAlert
from features.weather.models.weather_types import (
    CurrentWeather,
    DailyWeather,
    HourlyWeather,
    Precipitation,
    WeatherReport
)

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# Hourly graph layout, in template pixels
HOURLY_SLOTS = 12
GRAPH_X = (550, 770)
GRAPH_Y = (360, 460)
GRID_PADDING = 10       # how far gridlines extend past the graph
TEXT_PADDING = 4        # gap between gridline ends and their labels
TEMP_STEP = 5           # horizontal gridlines every 5 degrees
HOUR_LABEL_EVERY = 3

DAILY_SLOTS = 5
UMBRELLA_ICON = "umbrella.svg"

def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))

def format_percent(value: float) -> str:
    """Format a 0-1 fraction as a whole percentage."""
    return f"{round_half_away(value * 100)}%"

def format_degree(temperature: float) -> str:
    """Format a temperature rounded to a whole degree."""
    if math.isnan(temperature):
        return "--°"
    return f"{round_half_away(temperature)}°"

def temperature_bounds(temps: Sequence[float], step: int = TEMP_STEP) -> tuple:
    """Round the temperature range outward to multiples of ``step``."""
    upper = math.ceil(max(temps))
    lower = math.floor(min(temps))
    if upper % step != 0:
        upper += step - upper % step
    if lower % step != 0:
        lower -= lower % step
    if upper == lower:
        upper += step
    return upper, lower

class SvgRenderer:
    """Fills the display template with a weather report.

    Every element the renderer touches is looked up by its ``id``; a template
    missing one of them is rejected with ``TemplateStructureError``.
    """

    def __init__(self, template_path: Path, tz: Optional[tzinfo] = None):
        self.template_path = Path(template_path)
        self.tz = tz

    def _local(self, timestamp: int) -> datetime:
        return datetime.fromtimestamp(timestamp, self.tz)

    def _load_template(self) -> etree._ElementTree:
        if not self.template_path.exists():
            raise TemplateNotFoundError(f"Failed to read template file {self.template_path}")
        parser = etree.XMLParser(remove_blank_text=True)
        try:
            return etree.parse(str(self.template_path), parser)
        except etree.XMLSyntaxError as e:
            raise TemplateNotFoundError(f"Template {self.template_path} is not valid XML: {str(e)}") from e

    @staticmethod
    def _find(root: etree._Element, element_id: str) -> etree._Element:
        matches = root.xpath("//*[@id=$element_id]", element_id=element_id)
        if not matches:
            raise TemplateStructureError(f"Template has no element with id '{element_id}'")
        return matches[0]

    @staticmethod
    def _append_text(element: etree._Element, value: str):
        element.text = (element.text or "") + value

    @staticmethod
    def _set_href(element: etree._Element, href: str):
        element.set("href", href)
        element.set(f"{{{XLINK_NS}}}href", href)

    @staticmethod
    def _remove(element: etree._Element):
        element.getparent().remove(element)

    def render(self, report: WeatherReport, now: Optional[int] = None) -> etree._ElementTree:
        """Return the template tree with all groups filled in.

        ``now`` drives the alert status text and defaults to the time the
        report was fetched.
        """
        if now is None:
            now = int(report.fetched_at.timestamp())

        tree = self._load_template()
        root = tree.getroot()

        self.render_date(root, report.current.timestamp)
        self.render_current(root, report.current)
        self.render_precipitation(root, report.precipitation)
        self.render_hourly(root, report.hourly)
        self.render_daily(root, report.daily)
        self.render_alerts(root, report.alerts, now)
        return tree

    def render_to_file(self, report: WeatherReport, output_path: Path, now: Optional[int] = None) -> etree._ElementTree:
        """Render and save as UTF-8, returning the rendered tree."""
        tree = self.render(report, now)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tree.write(str(output_path), encoding="UTF-8", xml_declaration=True)
        logger.info(f"Wrote display image to {output_path}")
        return tree

    @staticmethod
    def to_bytes(tree: etree._ElementTree) -> bytes:
        return etree.tostring(tree, encoding="UTF-8", xml_declaration=True)

    def render_date(self, root: etree._Element, timestamp: int):
        moment = self._local(timestamp)
        self._find(root, "date").text = f"{moment:%A, %B} {moment.day}, {moment:%Y}"

    def render_current(self, root: etree._Element, current: CurrentWeather):
        self._append_text(self._find(root, "current-updated"), self._local(current.timestamp).strftime("%H:%M"))
        self._append_text(self._find(root, "current-aqi"), current.aqi.summary)
        self._append_text(self._find(root, "current-wind"), current.wind.summary)
        self._append_text(self._find(root, "current-uvi"), current.uvi.summary)
        self._append_text(self._find(root, "current-humidity"), format_percent(current.humidity))
        self._append_text(self._find(root, "current-feels-like"), format_degree(current.feels_like))
        self._find(root, "current-temp").text = format_degree(current.temp)
        self._find(root, "current-weather").text = current.weather
        self._set_href(self._find(root, "current-icon"), f"{current.icon}.svg")

    def render_precipitation(self, root: etree._Element, precipitation: Precipitation):
        self._append_text(self._find(root, "precip-hour"), format_percent(precipitation.hour))
        self._append_text(self._find(root, "precip-today"), format_percent(precipitation.today))

        icon = self._find(root, "precip-icon")
        icon.set("opacity", f"{max(precipitation.hour, precipitation.today):f}")
        self._set_href(icon, UMBRELLA_ICON)

    def render_hourly(self, root: etree._Element, hourly: List[HourlyWeather]):
        if len(hourly) < HOURLY_SLOTS:
            raise RenderError(f"Hourly graph needs {HOURLY_SLOTS} hours of data, got {len(hourly)}")
        hourly = hourly[:HOURLY_SLOTS]

        x_start, x_end = GRAPH_X
        y_start, y_end = GRAPH_Y
        colwidth = (x_end - x_start) // (HOURLY_SLOTS - 1)
        graph_height = y_end - y_start
        temp_max, temp_min = temperature_bounds([hour.temp for hour in hourly])
        divisions = (temp_max - temp_min) // TEMP_STEP

        # Probability of precipitation area, closed along the bottom edge
        points = [f"{x_start + i * colwidth},{y_end - graph_height * hour.pop:g}" for i, hour in enumerate(hourly)]
        points.append(f"{x_end},{y_end}")
        points.append(f"{x_start},{y_end}")
        self._find(root, "hourly-pop").set("points", " ".join(points))

        # Vertical gridlines only on every third hour
        for i in range(1, HOURLY_SLOTS - 1):
            if self._local(hourly[i].timestamp).hour % HOUR_LABEL_EVERY != 0:
                self._remove(self._find(root, f"hourly-vgrid-{i}"))

        # Hour labels under the kept gridlines
        for i, hour in enumerate(hourly):
            label = self._find(root, f"hourly-hour-{i}")
            local_hour = self._local(hour.timestamp).hour
            if local_hour % HOUR_LABEL_EVERY == 0:
                label.text = str(local_hour)
            else:
                self._remove(label)

        # Extra horizontal gridlines and their temperature labels
        hgrid = self._find(root, "hourly-hgrid")
        temps = self._find(root, "hourly-temps")
        for i in range(divisions - 1):
            y = y_start + (i + 1) * graph_height // divisions
            etree.SubElement(hgrid, f"{{{SVG_NS}}}line", {
                "class": "hourlygrid",
                "x1": str(x_start - GRID_PADDING),
                "y1": str(y),
                "x2": str(x_end + GRID_PADDING),
                "y2": str(y),
            })
            label = etree.SubElement(temps, f"{{{SVG_NS}}}text", {
                "class": "hourlytemp",
                "x": str(x_start - GRID_PADDING - TEXT_PADDING),
                "y": str(y),
            })
            label.text = format_degree(temp_max - (i + 1) * TEMP_STEP)

        self._find(root, "hourly-temp-max").text = format_degree(temp_max)
        self._find(root, "hourly-temp-min").text = format_degree(temp_min)

        # Temperature graph, one segment per pair of consecutive hours
        span = temp_max - temp_min
        for i in range(HOURLY_SLOTS - 1):
            start_y = y_end - graph_height * (hourly[i].temp - temp_min) / span
            end_y = y_end - graph_height * (hourly[i + 1].temp - temp_min) / span
            segment = self._find(root, f"hourly-temp-line-{i}")
            segment.set("y1", f"{start_y:f}")
            segment.set("y2", f"{end_y:f}")

    def render_daily(self, root: etree._Element, daily: List[DailyWeather]):
        # Fill out as many boxes as possible, up to DAILY_SLOTS
        for i, day in enumerate(daily[:DAILY_SLOTS]):
            self._find(root, f"daily-{i}-name").text = self._local(day.timestamp).strftime("%a")
            self._find(root, f"daily-{i}-temp").text = f"{format_degree(day.hi)}/{format_degree(day.lo)}"
            self._set_href(self._find(root, f"daily-{i}-icon"), f"{day.icon}.svg")

    def render_alerts(self, root: etree._Element, alerts: List[WeatherAlert], now: int):
        group = self._find(root, "group-alerts")

        if not alerts:
            group.set("visibility", "hidden")
            for child in list(group):
                group.remove(child)
            return

        self._find(root, "alerts-box").set("style", "fill:black")
        first_line = self._find(root, "alerts-line-1")
        second_line = self._find(root, "alerts-line-2")

        first_line.text = alerts[0].name
        if len(alerts) == 1:
            second_line.text = f"({alerts[0].status(now, self.tz)})"
        elif len(alerts) == 2:
            second_line.text = alerts[1].name
        else:
            second_line.text = f"({len(alerts) - 1} more alerts)"
