__module__ = "valkeyfips.constants"

RESULT_LEVEL_PASS = "pass"
RESULT_LEVEL_FAIL = "fail"
RESULT_LEVEL_WARN = "warn"
RESULT_LEVEL_INFO = "info"
RESULT_LEVEL_PASS_DEFAULT = "PASS!"
RESULT_LEVEL_FAIL_DEFAULT = "FAIL!"
RESULT_LEVEL_WARN_DEFAULT = "WARN!"
RESULT_LEVEL_INFO_DEFAULT = "INFO!"
DEFAULT_MAP = {
    RESULT_LEVEL_PASS: RESULT_LEVEL_PASS_DEFAULT,
    RESULT_LEVEL_FAIL: RESULT_LEVEL_FAIL_DEFAULT,
    RESULT_LEVEL_WARN: RESULT_LEVEL_WARN_DEFAULT,
    RESULT_LEVEL_INFO: RESULT_LEVEL_INFO_DEFAULT,
}

CLI_COLOR_PRIMARY = "deep_sky_blue1"
CLI_COLOR_PASS = "dark_sea_green2"
CLI_COLOR_FAIL = "light_coral"
CLI_COLOR_WARN = "khaki1"
CLI_COLOR_INFO = "light_sky_blue1"
CLI_COLOR_MAP = {
    RESULT_LEVEL_PASS: CLI_COLOR_PASS,
    RESULT_LEVEL_FAIL: CLI_COLOR_FAIL,
    RESULT_LEVEL_WARN: CLI_COLOR_WARN,
    RESULT_LEVEL_INFO: CLI_COLOR_INFO,
}
CLI_ICON_MAP = {
    RESULT_LEVEL_PASS: ":white_heavy_check_mark:",
    RESULT_LEVEL_FAIL: ":cross_mark:",
    RESULT_LEVEL_WARN: ":warning:",
    RESULT_LEVEL_INFO: ":information_source:",
}

CHECK_STATUS_PASS = "pass"
CHECK_STATUS_FAIL = "fail"
CHECK_STATUS_SKIP = "skip"

ENV_CONFIG_FILE = "VALKEY_FIPS_CONFIG"
ENV_VARIANT = "VALKEY_FIPS_VARIANT"
ENV_LOG_LEVEL = "VALKEY_FIPS_LOG_LEVEL"
ENV_REPORT_FILE = "VALKEY_FIPS_REPORT"

BANNER_RULE = "=" * 40
