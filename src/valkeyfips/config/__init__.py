import logging
from os import path, environ as os_environ
from pathlib import Path
from copy import deepcopy
from typing import Union, Mapping

import yaml
from pydantic import ValidationError

from .. import constants
from ..exceptions import ConfigurationError
from ..models import ValidatorConfig

__module__ = "valkeyfips.config"

logger = logging.getLogger(__name__)
DEFAULT_CONFIG = "/etc/valkey-fips/config.yaml"
CONFIG_DIR = str(Path(__file__).parent)


def _deep_merge(*args) -> dict:
    assert len(args) >= 2, "_deep_merge requires at least two dicts to merge"
    result = deepcopy(args[0])
    if not isinstance(result, dict):
        raise AttributeError(
            f"_deep_merge only takes dict arguments, got {type(result)} {result}"
        )
    for merge_dict in args[1:]:
        if not isinstance(merge_dict, dict):
            raise AttributeError(
                f"_deep_merge only takes dict arguments, got {type(merge_dict)} {merge_dict}"
            )
        for key, merge_val in merge_dict.items():
            result_val = result.get(key)
            if isinstance(result_val, dict) and isinstance(merge_val, dict):
                result[key] = _deep_merge(result_val, merge_val)
            else:
                result[key] = deepcopy(merge_val)
    return result


def _default_dict_merger(key: str, item1: dict, item2: dict) -> dict:
    merged = deepcopy(item1)
    merged.update(item2)
    return merged


def merge_lists_by_value(
    *args, unique_key: str = "key", merge_fn=_default_dict_merger
) -> list:
    assert len(args) >= 2, "merge_lists_by_value requires at least two lists to merge"
    result = deepcopy(args[0])
    if not isinstance(result, list):
        raise AttributeError("merge_lists_by_value only takes list arguments")
    for merge_list in args[1:]:
        if not isinstance(merge_list, list):
            raise AttributeError("merge_lists_by_value only takes list arguments")
        if not merge_list:
            continue
        result = _merge_2_lists_of_dicts(
            result, deepcopy(merge_list), unique_key=unique_key, merge_fn=merge_fn
        )

    return list(filter(None, result))


def _merge_2_lists_of_dicts(
    list1: list, list2: list, unique_key: str = "key", merge_fn=_default_dict_merger
) -> list:
    if not isinstance(list1, list) or not isinstance(list2, list):
        raise AttributeError("_merge_2_lists_of_dicts only takes list arguments")
    overrides = {item.get(unique_key): item for item in list2}
    result = []
    index = set()
    # list1 order is kept, the checklist runs in this order
    for item1 in list1:
        item_key = item1.get(unique_key)
        index.add(item_key)
        if item_key in overrides:
            result.append(merge_fn(unique_key, item1, overrides[item_key]))
        else:
            result.append(item1)
    for item2 in list2:
        if item2.get(unique_key) not in index:
            result.append(item2)

    return result


def base_config() -> dict:
    return yaml.safe_load(Path(path.join(CONFIG_DIR, "base.yaml")).read_bytes())


def variants_config() -> dict:
    return yaml.safe_load(Path(path.join(CONFIG_DIR, "variants.yaml")).read_bytes())


def load_config(filename: Union[str, None] = DEFAULT_CONFIG) -> dict:
    if not filename:
        return {}
    config_path = Path(filename)
    if not config_path.is_file():
        return {}
    logger.debug(config_path.absolute())
    try:
        conf = yaml.safe_load(config_path.read_text(encoding="utf8"))
    except (OSError, yaml.YAMLError) as err:
        raise ConfigurationError(f"Unable to read {filename}: {err}") from err
    if conf is None:
        return {}
    if not isinstance(conf, dict):
        raise ConfigurationError(f"{filename} must contain a mapping")
    return conf


def combine_configs(user_conf: dict, variant: Union[str, None] = None) -> dict:
    default_values = base_config()
    variant = variant or user_conf.get("variant") or default_values.get("variant")
    variant_values = {}
    if variant:
        variants = variants_config()
        if variant not in variants:
            raise ConfigurationError(
                f"Unknown build variant '{variant}', expected one of {', '.join(sorted(variants))}"
            )
        variant_values = variants[variant]

    ret_config = _deep_merge(
        {k: v for k, v in default_values.items() if k not in ["checks", "outputs"]},
        variant_values,
        {k: v for k, v in user_conf.items() if k not in ["checks", "outputs"]},
    )
    ret_config["variant"] = variant
    ret_config["checks"] = merge_lists_by_value(
        default_values.get("checks", []),
        variant_values.get("checks", []),
        user_conf.get("checks", []),
        unique_key="key",
    )
    outputs = list(user_conf.get("outputs", []))
    outputs.extend(
        [
            item
            for item in default_values.get("outputs", [])
            if item["type"] not in [i.get("type") for i in outputs]
        ]
    )
    ret_config["outputs"] = outputs
    return ret_config


def get_config(
    filename: Union[str, None] = None,
    variant: Union[str, None] = None,
    environ: Union[Mapping[str, str], None] = None,
) -> ValidatorConfig:
    """
    Resolves the validator configuration once: packaged defaults, then the
    selected build variant, then the user file. No variant is assumed, when
    none is selected the user file has to supply every path.
    """
    environ = os_environ if environ is None else environ
    filename = filename or environ.get(constants.ENV_CONFIG_FILE, DEFAULT_CONFIG)
    variant = variant or environ.get(constants.ENV_VARIANT) or None
    combined = combine_configs(load_config(filename), variant)
    if not combined.get("paths"):
        raise ConfigurationError(
            f"No build variant selected and no paths configured, set {constants.ENV_VARIANT} or provide {filename}"
        )
    try:
        return ValidatorConfig(**combined)
    except ValidationError as err:
        raise ConfigurationError(f"Invalid configuration: {err}") from err
