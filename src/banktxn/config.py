"""Loading and validation of CSV format configuration.

Formats are declared in a YAML document under a ``csv-config-map`` key::

    csv-config-map:
      capital-one:
        bank-name: Capital One
        default-currency-iso-code: USD
        date-header: Transaction Date
        date-format: MM/dd/uu
        description-header: Transaction Description
        credit-header: Transaction Amount
        debit-header: Transaction Amount
        type-header: Transaction Type

The file is read from an explicit path, the ``BANKTXN_FORMATS_PATH``
environment variable, or the ``formats.yaml`` bundled with the package, in that
order. Every entry is validated when loaded so a broken configuration stops the
process before any file is imported.
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from banktxn.domain.entities import CSVConfig
from banktxn.domain.errors import ValidationError
from banktxn.utils.date_format import DateFormatter

logger = logging.getLogger(__name__)

DEFAULT_FORMATS_PATH = Path(__file__).parent / "formats.yaml"
FORMATS_ENV_VAR = "BANKTXN_FORMATS_PATH"
CONFIG_MAP_KEY = "csv-config-map"

_REQUIRED_FIELDS = (
    "bank_name",
    "default_currency_iso_code",
    "date_header",
    "date_format",
    "description_header",
    "debit_header",
    "credit_header",
)
_OPTIONAL_FIELDS = ("type_header",)


def resolve_formats_path(path: Union[str, Path, None] = None) -> Path:
    """Return the configuration file to load."""
    if path is None:
        path = os.environ.get(FORMATS_ENV_VAR)
    if path is None:
        return DEFAULT_FORMATS_PATH
    return Path(path)


def load_csv_configs(path: Union[str, Path, None] = None) -> dict[str, CSVConfig]:
    """Load and validate format configuration from a YAML file.

    Args:
        path: Optional path to the YAML file

    Returns:
        Mapping of format key to CSVConfig

    Raises:
        ValidationError: If the file cannot be read or any entry is invalid
    """
    formats_path = resolve_formats_path(path)
    try:
        with open(formats_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ValidationError(f"Could not read format configuration '{formats_path}': {e}") from e
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in format configuration '{formats_path}': {e}") from e

    return parse_csv_configs(data, source=str(formats_path))


def parse_csv_configs(data: Any, source: str = "<config>") -> dict[str, CSVConfig]:
    """Build CSVConfig objects from an already-parsed configuration document."""
    if not isinstance(data, Mapping):
        raise ValidationError(f"Format configuration '{source}' must be a mapping")

    entries = data.get(CONFIG_MAP_KEY, data.get(CONFIG_MAP_KEY.replace("-", "_")))
    if entries is None:
        raise ValidationError(f"Format configuration '{source}' has no '{CONFIG_MAP_KEY}' section")
    if not isinstance(entries, Mapping):
        raise ValidationError(f"'{CONFIG_MAP_KEY}' in '{source}' must be a mapping")

    return {str(key): build_csv_config(str(key), entry) for key, entry in entries.items()}


def _field_label(name: str) -> str:
    return name.replace("_", "-")


def build_csv_config(format_key: str, entry: Any) -> CSVConfig:
    """Validate a single configuration entry.

    Raises:
        ValidationError: If a required field is missing or blank, the currency is
            not a three-letter code, or the date format is not a valid pattern
    """
    if not isinstance(entry, Mapping):
        raise ValidationError(f"Format '{format_key}' must be a mapping of settings")

    settings = {str(k).strip().replace("-", "_"): v for k, v in entry.items()}
    unknown = sorted(set(settings) - set(_REQUIRED_FIELDS) - set(_OPTIONAL_FIELDS))
    if unknown:
        logger.warning(
            "Ignoring unknown settings for format '%s': %s",
            format_key,
            ", ".join(_field_label(k) for k in unknown),
        )

    values: dict[str, Optional[str]] = {}
    for name in _REQUIRED_FIELDS:
        value = settings.get(name)
        if value is None or not str(value).strip():
            raise ValidationError(
                f"Format '{format_key}' is missing required setting '{_field_label(name)}'"
            )
        values[name] = str(value).strip()

    # A blank type header means the type is implied by the debit/credit columns
    type_header = settings.get("type_header")
    if type_header is not None and str(type_header).strip():
        values["type_header"] = str(type_header).strip()
    else:
        values["type_header"] = None

    currency = values["default_currency_iso_code"].upper()
    if len(currency) != 3 or not currency.isalpha():
        raise ValidationError(
            f"Format '{format_key}' has invalid currency code '{values['default_currency_iso_code']}'"
        )
    values["default_currency_iso_code"] = currency

    try:
        DateFormatter(values["date_format"])
    except ValueError as e:
        raise ValidationError(f"Format '{format_key}' has invalid date-format: {e}") from e

    return CSVConfig(**values)
