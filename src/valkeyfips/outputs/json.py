import json
from dataclasses import asdict
from pathlib import Path

from . import parse_filename
from ..checks import ValidationReport
from ..models import ValidatorConfig, OutputType


def report_data(report: ValidationReport, **kwargs) -> dict:
    return {
        "generator": "valkey-fips",
        **kwargs,
        **asdict(report),
    }


def save_to(template_filename: str, data: dict, **kwargs) -> str:
    filename = parse_filename(template_filename, **kwargs)
    json_path = Path(filename)
    Path(json_path.parent).mkdir(parents=True, exist_ok=True)
    json_path.write_text(
        json.dumps(
            data,
            sort_keys=True,
            indent=4,
            default=str,
        ),
        encoding="utf8",
    )

    return json_path.as_posix()


def report_paths(config: ValidatorConfig, extra_paths: list[str] = None) -> list[str]:
    json_output = [
        n.path for n in config.outputs if n.type == OutputType.JSON and n.path
    ]
    json_output.extend(p for p in extra_paths or [] if p and p not in json_output)
    return json_output


def save_report(
    config: ValidatorConfig,
    report: ValidationReport,
    extra_paths: list[str] = None,
    **kwargs,
) -> list[str]:
    return [
        save_to(
            template_filename=json_file,
            data=report_data(report, **kwargs),
            variant=config.variant or "custom",
            status="passed" if report.passed else "failed",
        )
        for json_file in report_paths(config, extra_paths)
    ]
