"""CSV format domain service."""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from banktxn.config import load_csv_configs
from banktxn.domain.entities import CSVConfig
from banktxn.domain.errors import CSVFormatNotSupportedError

logger = logging.getLogger(__name__)


class CSVFormatService:
    """Read-only registry of supported CSV formats, keyed by format name."""

    def __init__(self, configs: Mapping[str, CSVConfig]):
        """Initialize CSV format service.

        Args:
            configs: Validated mapping of format key to CSVConfig
        """
        self._configs = MappingProxyType(dict(configs))

    @classmethod
    def from_file(cls, path: Union[str, Path, None] = None) -> "CSVFormatService":
        """Load formats from YAML configuration and log what was loaded.

        Raises:
            ValidationError: If the configuration is unreadable or invalid
        """
        service = cls(load_csv_configs(path))
        service.log_configuration()
        return service

    def lookup(self, format_key: str) -> CSVConfig:
        """Get the configuration for a format.

        Raises:
            CSVFormatNotSupportedError: If no configuration exists for the key
        """
        config = self._configs.get(format_key)
        if config is None:
            raise CSVFormatNotSupportedError(format_key)
        return config

    def get_format(self, format_key: str) -> Optional[CSVConfig]:
        """Get the configuration for a format, or None if unknown."""
        return self._configs.get(format_key)

    def list_formats(self) -> list[tuple[str, CSVConfig]]:
        """List formats sorted by key."""
        return sorted(self._configs.items())

    def date_formats(self) -> set[str]:
        """Distinct date patterns used by the configured formats."""
        return {config.date_format for config in self._configs.values()}

    def log_configuration(self) -> None:
        logger.info("Loaded %d CSV formats", len(self._configs))
        for key, config in self.list_formats():
            logger.info(
                "Format '%s': bank=%s currency=%s date=%s(%s) layout=%s",
                key,
                config.bank_name,
                config.default_currency_iso_code,
                config.date_header,
                config.date_format,
                "type column" if config.type_header else "debit/credit columns",
            )
