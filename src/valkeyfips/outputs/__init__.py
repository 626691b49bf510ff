from datetime import datetime, timezone


def parse_filename(config_value: str, **kwargs) -> str:
    if not has_params(config_value):
        return config_value
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return config_value.format(
        **{
            **{
                "date_month": now.month,
                "date_day": now.day,
                "date_year": now.year,
                "date_iso8601": now.strftime("%Y-%m-%dT%H%M%SZ"),
            },
            **kwargs,
        }
    )


def has_params(config_value: str) -> bool:
    return "{" in config_value and "}" in config_value
