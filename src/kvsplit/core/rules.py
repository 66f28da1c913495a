"""Loading and validating named extraction rules from YAML files."""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError
import yaml

from .errors import KvConfigError, RuleValidationError
from .extractor import ExtractorBuilder, ExtractorComponent
from .models import ExtractorConfig, RuleSetConfig


logger = logging.getLogger(__name__)

FILE_RULE_NAME = "<file>"


class RuleFile:
    """A YAML file holding extraction rules under a top level ``rules`` key."""

    def __init__(self, file_path: Path | str) -> None:
        self.file_path: Path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"File {self.file_path} does not exist.")

    @property
    def content(self) -> str:
        return self.file_path.read_text()

    @property
    def raw_rules(self) -> dict[str, Any]:
        """
        Parse the file and return the raw (unvalidated) rule mappings.

        Raises:
            KvConfigError: If the file is not valid YAML or its layout is wrong.
        """
        error_collector = KvConfigError(file_path=self.file_path)

        try:
            document = yaml.safe_load(self.content)
        except yaml.YAMLError as e:
            error_collector.add_error(
                RuleValidationError(
                    rule_name=FILE_RULE_NAME,
                    field_path="",
                    message=f"Invalid YAML: {e}",
                )
            )
            raise error_collector

        try:
            rule_set = RuleSetConfig.model_validate(document)
        except ValidationError as e:
            for err in e.errors():
                error_collector.add_error(
                    RuleValidationError(
                        rule_name=FILE_RULE_NAME,
                        field_path=".".join(str(loc) for loc in err["loc"]),
                        message=err["msg"],
                        invalid_value=err.get("input"),
                    )
                )
            raise error_collector

        return rule_set.rules

    def validate(self, skip_validation: bool = False) -> dict[str, ExtractorConfig]:
        """
        Validate all rules, collecting all errors.

        Args:
            skip_validation: If True, drop invalid rules instead of raising.

        Returns:
            Validated configs by rule name.

        Raises:
            KvConfigError: If any rule is invalid and skip_validation is False.
        """
        error_collector = KvConfigError(file_path=self.file_path)
        validated: dict[str, ExtractorConfig] = {}

        raw_rules = self.raw_rules
        for rule_name, raw_config in raw_rules.items():
            try:
                validated[rule_name] = ExtractorConfig.model_validate(raw_config)
            except ValidationError as e:
                for err in e.errors():
                    error_collector.add_error(
                        RuleValidationError(
                            rule_name=rule_name,
                            field_path=".".join(str(loc) for loc in err["loc"]),
                            message=err["msg"],
                            invalid_value=err.get("input"),
                        )
                    )

        if error_collector.has_errors():
            if not skip_validation:
                raise error_collector
            logger.warning(
                f"Skipping {len(raw_rules) - len(validated)} invalid rule(s) "
                f"in {self.file_path}"
            )

        logger.info(f"Loaded {len(validated)} rule(s) from {self.file_path}")
        return validated

    def extractors(
        self, with_logging: bool = True, skip_validation: bool = False
    ) -> dict[str, ExtractorComponent]:
        """Build one extractor per valid rule, keyed by rule name."""
        extractors: dict[str, ExtractorComponent] = {}
        for rule_name, config in self.validate(skip_validation).items():
            builder = ExtractorBuilder.from_config(config)
            if with_logging:
                builder = builder.with_logging(logging.getLogger(f"{__name__}.{rule_name}"))
            extractors[rule_name] = builder.build()
        return extractors
