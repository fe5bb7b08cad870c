"""Secret data synthesis from 1Password items

Three strategies are tried in order and the first one that handles the
item wins:

1. Image pull secret: a single .dockerconfigjson key
2. Template: one key per declared template
3. Default: one key per field label, plus attached files
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from secretsync.exceptions import SecretSyncError
from secretsync.models.item import Item
from secretsync.models.secret import DOCKER_CONFIG_JSON_KEY, ImagePullSecretConfig, SecretTemplate
from secretsync.template.context import build_template_context
from secretsync.template.engine import TemplateEvaluator
from secretsync.template.imagepullsecret import build_docker_config_json
from secretsync.utils.naming import format_secret_data_key, is_config_map_key


@dataclass
class StrategyResult:
    """Outcome of one synthesis strategy

    A strategy that does not apply returns handled=False with no error.
    A strategy that applies but fails returns handled=False with the error
    so the next strategy can take over.
    """
    data: Dict[str, bytes] = field(default_factory=dict)
    handled: bool = False
    error: Optional[Exception] = None


Strategy = Callable[[Item, Optional[SecretTemplate], Optional[ImagePullSecretConfig]], StrategyResult]


class SecretDataSynthesizer:
    """Builds Secret data (key -> bytes) from an item"""

    def __init__(self, evaluator: Optional[TemplateEvaluator] = None, logger: Optional[logging.Logger] = None):
        """Initialize synthesizer

        Args:
            evaluator: Template evaluator (default: sandboxed Jinja2 evaluator)
            logger: Logger for recoverable failures (default: module logger)
        """
        self.evaluator = evaluator or TemplateEvaluator()
        self.logger = logger or logging.getLogger(__name__)
        self.strategies: List[Strategy] = [
            self.image_pull_secret_strategy,
            self.template_strategy,
            self.default_strategy,
        ]

    def build(
        self,
        item: Item,
        template: Optional[SecretTemplate] = None,
        image_pull_secret: Optional[ImagePullSecretConfig] = None,
    ) -> Dict[str, bytes]:
        """Build Secret data using the first strategy that handles the item

        Args:
            item: Source item
            template: Optional key -> template mapping
            image_pull_secret: Optional registry credential field mapping

        Returns:
            Secret data with valid, unique keys
        """
        for strategy in self.strategies:
            result = strategy(item, template, image_pull_secret)
            if result.handled:
                return result.data
            if result.error is not None:
                self.logger.error(
                    f"Failed to build secret data for item '{item.id}' ({result.error.__class__.__name__}: "
                    f"{result.error}), falling back to the next strategy"
                )
        return {}

    def image_pull_secret_strategy(
        self,
        item: Item,
        template: Optional[SecretTemplate],
        image_pull_secret: Optional[ImagePullSecretConfig],
    ) -> StrategyResult:
        """Build a .dockerconfigjson payload from the configured fields"""
        if image_pull_secret is None:
            return StrategyResult()

        fields = {f.label: f.value for f in item.fields}
        try:
            docker_config = build_docker_config_json(
                fields.get(image_pull_secret.registry_field, ""),
                fields.get(image_pull_secret.username_field, ""),
                fields.get(image_pull_secret.password_field, ""),
                fields.get(image_pull_secret.email_field, ""),
            )
        except SecretSyncError as e:
            return StrategyResult(error=e)

        return StrategyResult(data={DOCKER_CONFIG_JSON_KEY: docker_config}, handled=True)

    def template_strategy(
        self,
        item: Item,
        template: Optional[SecretTemplate],
        image_pull_secret: Optional[ImagePullSecretConfig],
    ) -> StrategyResult:
        """Render each template key; failed keys are skipped"""
        if template is None or not template.data:
            return StrategyResult()

        ctx = build_template_context(item)
        data: Dict[str, bytes] = {}
        for key, source in template.data.items():
            data_key = format_secret_data_key(key)
            if not self._usable_key(data_key, f"template key '{key}'"):
                continue
            try:
                rendered = self.evaluator.process(source, ctx)
            except SecretSyncError as e:
                self.logger.error(f"Failed to process template for key '{key}', skipping: {e.message}")
                continue
            data[data_key] = rendered

        return StrategyResult(data=data, handled=True)

    def default_strategy(
        self,
        item: Item,
        template: Optional[SecretTemplate],
        image_pull_secret: Optional[ImagePullSecretConfig],
    ) -> StrategyResult:
        """Map every field label to its value, then fill in attached files"""
        data: Dict[str, bytes] = {}
        for item_field in item.fields:
            data_key = format_secret_data_key(item_field.label)
            if self._usable_key(data_key, f"field '{item_field.label}'"):
                data[data_key] = item_field.value.encode("utf-8")

        for item_file in item.files:
            if not self._usable_key(item_file.name, f"file '{item_file.name}'"):
                continue
            try:
                content = item_file.content()
            except Exception as e:
                self.logger.error(f"Could not load contents of file {item_file.name}: {e}")
                continue
            if content is None:
                continue
            if item_file.name in data:
                self.logger.info(f"File '{item_file.name}' ignored because of a field with the same name")
                continue
            data[item_file.name] = content

        return StrategyResult(data=data, handled=True)

    def _usable_key(self, key: str, source: str) -> bool:
        """Check a data key, warning when its source has to be skipped"""
        if is_config_map_key(key):
            return True
        self.logger.warning(f"Skipping {source}: '{key}' is not a valid Secret data key")
        return False
