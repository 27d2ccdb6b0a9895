"""JSON exporter."""
import json
from pathlib import Path
from datetime import datetime

from apidoc.schema.models import AnalysisReport


class JsonExporter:
    """Export analyzed operation schemas to JSON."""

    def export(self, output_file: Path, report: AnalysisReport) -> None:
        """Export to JSON file."""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "total_operations": len(report.operations),
                "total_failures": len(report.failures),
                "groups": sorted({operation.group for operation in report.operations}),
            },
            **report.to_dict(),
        }

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str, ensure_ascii=False)
