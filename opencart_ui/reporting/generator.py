"""
Execution report sink and writer.

Finalized execution records are appended to an ``ExecutionReport`` and
written out on ``flush()`` as a single HTML page (optionally with a JSON
twin) at a fixed path that each run overwrites.
"""

import json
import os
import platform
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..constants import REPORT_NAME
from ..core.exceptions import FileOperationError
from ..core.logging_config import get_logger
from .models import ExecutionRecord, ReportFormat, RunReport, TestResultSummary


logger = get_logger(__name__)


class ExecutionReport:
    """
    Thread-safe, append-only collection of execution records.

    Args:
        output_path: Report file, overwritten by every flush
        report_name: Title shown in the report
        system_info: Key/value pairs shown in the report header
        formats: Formats written on flush; JSON goes next to the HTML file
        template_dir: Optional directory holding a ``report.html`` override
    """

    def __init__(
        self,
        output_path: Path,
        report_name: str = REPORT_NAME,
        system_info: Optional[Dict[str, Any]] = None,
        formats: Optional[List[ReportFormat]] = None,
        template_dir: Optional[Path] = None,
    ):
        self.output_path = Path(output_path)
        self.report_name = report_name
        self.system_info = system_info if system_info is not None else default_system_info()
        self.formats = formats or [ReportFormat.HTML]
        self.template_dir = template_dir
        self.suite_name: Optional[str] = None
        self.started_at = datetime.now()

        loader = FileSystemLoader(str(template_dir)) if template_dir else None
        self.jinja_env = Environment(
            loader=loader,
            autoescape=select_autoescape(default=True, default_for_string=True),
        )

        self._entries: List[ExecutionRecord] = []
        self._lock = threading.Lock()

    def add_entry(self, record: ExecutionRecord) -> ExecutionRecord:
        """
        Append a finalized copy of ``record``.

        The stored copy is never modified afterwards; later changes to
        ``record`` do not reach the report.
        """
        stored = record.model_copy(deep=True)
        stored.finalized = True
        with self._lock:
            self._entries.append(stored)
        return stored

    @property
    def entries(self) -> List[ExecutionRecord]:
        with self._lock:
            return list(self._entries)

    def build(self) -> RunReport:
        return self._snapshot(self.entries)

    def _snapshot(self, entries: List[ExecutionRecord]) -> RunReport:
        return RunReport(
            report_name=self.report_name,
            suite_name=self.suite_name,
            started_at=self.started_at,
            completed_at=datetime.now(),
            system_info=self.system_info,
            summary=TestResultSummary.from_records(entries),
            entries=entries,
        )

    def flush(self) -> RunReport:
        """Write all entries accumulated so far to the report file(s)."""
        with self._lock:
            report = self._snapshot(list(self._entries))
            for report_format in self.formats:
                self._save_report(report, report_format)

        logger.info(
            f"Report flushed: {report.summary.passed}/{report.summary.total_tests} tests passed",
            extra={"metadata": {"path": str(self.output_path)}},
        )
        return report

    def json_path(self) -> Path:
        return self.output_path.with_suffix(".json")

    def _save_report(self, report: RunReport, report_format: ReportFormat) -> None:
        path = self.output_path if report_format == ReportFormat.HTML else self.json_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if report_format == ReportFormat.HTML:
                self._save_html_report(report, path)
            elif report_format == ReportFormat.JSON:
                self._save_json_report(report, path)
            else:
                raise ValueError(f"Unsupported report format: {report_format}")
        except (OSError, ValueError) as e:
            raise FileOperationError(
                f"Failed to save report: {e}",
                file_path=str(path),
                operation="write",
            ) from e

    def _save_json_report(self, report: RunReport, path: Path) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report.model_dump(mode="json"), f, indent=2)

    def _save_html_report(self, report: RunReport, path: Path) -> None:
        if self.template_dir and (Path(self.template_dir) / "report.html").exists():
            template = self.jinja_env.get_template("report.html")
        else:
            template = self.jinja_env.from_string(DEFAULT_HTML_TEMPLATE)

        html_content = template.render(
            report=report,
            screenshot_src=lambda p: _relative_src(p, path.parent),
        )

        with open(path, "w", encoding="utf-8") as f:
            f.write(html_content)


def default_system_info() -> Dict[str, Any]:
    return {
        "System": platform.system(),
        "Python": platform.python_version(),
        "Build#": "1.1",
        "Team": "OpenCart QA Team",
        "ENV NAME": os.getenv("OPENCART_ENV", "qa"),
    }


def _relative_src(screenshot: str, report_dir: Path) -> str:
    try:
        return Path(os.path.relpath(screenshot, report_dir)).as_posix()
    except ValueError:
        # different drive on Windows
        return Path(screenshot).as_uri()


DEFAULT_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{{ report.report_name }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; }
        .header { background: #f5f5f5; padding: 20px; border-radius: 5px; }
        .summary { margin: 20px 0; }
        .passed { color: green; }
        .failed { color: red; }
        .skipped { color: orange; }
        .not-run { color: gray; }
        .entry { border: 1px solid #ddd; border-radius: 5px; margin: 10px 0; padding: 10px; }
        .category { background: #eef; border-radius: 3px; padding: 2px 6px; margin-right: 4px; }
        pre { background: #fafafa; padding: 8px; overflow-x: auto; }
        img.screenshot { max-width: 640px; border: 1px solid #ccc; }
        table { border-collapse: collapse; }
        th, td { border: 1px solid #ddd; padding: 4px 8px; text-align: left; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ report.report_name }}</h1>
        {% if report.suite_name %}<p><strong>Suite:</strong> {{ report.suite_name }}</p>{% endif %}
        <p><strong>Started:</strong> {{ report.started_at }}</p>
        <p><strong>Completed:</strong> {{ report.completed_at }}</p>
        <table>
        {% for key, value in report.system_info.items() %}
            <tr><th>{{ key }}</th><td>{{ value }}</td></tr>
        {% endfor %}
        </table>
    </div>

    <div class="summary">
        <h2>Summary</h2>
        <p><strong>Total Tests:</strong> {{ report.summary.total_tests }}</p>
        <p><strong>Passed:</strong> <span class="passed">{{ report.summary.passed }}</span></p>
        <p><strong>Failed:</strong> <span class="failed">{{ report.summary.failed }}</span></p>
        <p><strong>Skipped:</strong> <span class="skipped">{{ report.summary.skipped }}</span></p>
        <p><strong>Success Rate:</strong> {{ "%.1f"|format(report.summary.success_rate) }}%</p>
        <p><strong>Duration:</strong> {{ "%.2f"|format(report.summary.duration) }}s</p>
    </div>

    <h2>Tests</h2>
    {% for entry in report.entries %}
    <div class="entry" data-status="{{ entry.status.value }}">
        <h3>{{ entry.name }} <span class="{{ entry.status.value }}">{{ entry.status.value.upper() }}</span></h3>
        <p>{% for category in entry.categories %}<span class="category">{{ category }}</span>{% endfor %}</p>
        {% if entry.description %}<p>{{ entry.description }}</p>{% endif %}
        <p><strong>Start:</strong> {{ entry.started_at }} <strong>End:</strong> {{ entry.ended_at }}
           <strong>Retry:</strong> {{ entry.retry_count }}</p>
        <ul>
        {% for event in entry.events %}
            <li class="{{ event.status.value }}">{{ event.timestamp.strftime("%H:%M:%S") }} {{ event.message }}</li>
        {% endfor %}
        </ul>
        {% if entry.error_message %}
        <pre>{{ entry.error_type }}{% if entry.error_kind %} [{{ entry.error_kind }}]{% endif %}: {{ entry.error_message }}
{{ entry.stack_trace or "" }}</pre>
        {% endif %}
        {% for shot in entry.screenshots %}
        <p><a href="{{ screenshot_src(shot) }}"><img class="screenshot" src="{{ screenshot_src(shot) }}" alt="{{ entry.name }}"></a></p>
        {% endfor %}
    </div>
    {% endfor %}
</body>
</html>
"""
