"""Secret templating: item context, rendering and registry credentials"""

from secretsync.template.context import TemplateContext, build_template_context
from secretsync.template.engine import TemplateEvaluator, process_template
from secretsync.template.imagepullsecret import build_docker_config_json

__all__ = [
    "TemplateContext",
    "build_template_context",
    "TemplateEvaluator",
    "process_template",
    "build_docker_config_json",
]
