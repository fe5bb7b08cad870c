"""Secret template rendering with a sandboxed Jinja2 environment

Templates address the item through three views::

    {{ Fields.username }}
    {{ Fields["api-key"] }}
    {{ index(Sections, "Credentials", "username") }}
    {{ index(FieldsByID, "field-1") }}

A key missing from a view renders as an empty string. Any other
undefined name is an execution error.
"""

from collections.abc import Mapping
from typing import Any, Optional

import jinja2
from jinja2.sandbox import SandboxedEnvironment

from secretsync.exceptions import TemplateExecutionError, TemplateParseError
from secretsync.template.context import TemplateContext


class ItemUndefined(jinja2.Undefined):
    """Undefined that tolerates absent map keys and nothing else

    Unknown top-level names, attributes of plain values and attributes
    blocked by the sandbox all fail on use.
    """
    __slots__ = ()

    def _check_defined(self) -> None:
        if not isinstance(self._undefined_obj, Mapping):
            self._fail_with_undefined_error()

    def __str__(self) -> str:
        self._check_defined()
        return ""

    def __bool__(self) -> bool:
        self._check_defined()
        return False

    def __iter__(self):
        self._check_defined()
        return iter(())

    def __len__(self) -> int:
        self._check_defined()
        return 0


def index(container: Any, *keys: Any) -> Any:
    """Walk nested mappings by key, like Go's text/template index builtin

    Returns an empty string as soon as a key is absent.
    """
    if isinstance(container, jinja2.Undefined):
        raise jinja2.UndefinedError(f"index of undefined value {container._undefined_name!r}")

    value = container
    for key in keys:
        if not isinstance(value, Mapping):
            raise TypeError(f"cannot index value of type {type(value).__name__} with {key!r}")
        if key not in value:
            return ""
        value = value[key]
    return value


class TemplateEnvironment(SandboxedEnvironment):
    """Sandboxed environment where mapping keys shadow mapping methods

    Without this, ``Fields.items`` would resolve to ``dict.items`` instead
    of a field labeled "items".
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping):
            return self._lookup(obj, attribute)
        return super().getattr(obj, attribute)

    def getitem(self, obj: Any, argument: Any) -> Any:
        if isinstance(obj, Mapping):
            return self._lookup(obj, argument)
        return super().getitem(obj, argument)

    def _lookup(self, obj: Mapping, key: Any) -> Any:
        try:
            return obj[key]
        except (KeyError, TypeError):
            return self.undefined(obj=obj, name=key)


class TemplateEvaluator:
    """Parses and renders secret templates against a TemplateContext"""

    def __init__(self, environment: Optional[jinja2.Environment] = None):
        self.environment = environment or self._create_environment()

    @staticmethod
    def _create_environment() -> jinja2.Environment:
        env = TemplateEnvironment(
            undefined=ItemUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            auto_reload=False,
        )
        # only the item views and index are addressable
        env.globals.clear()
        env.globals["index"] = index
        return env

    def process(self, template: str, ctx: TemplateContext) -> bytes:
        """Render a template string with the given context

        Args:
            template: Template source
            ctx: Item views built by build_template_context

        Returns:
            Rendered output as UTF-8 bytes

        Raises:
            TemplateParseError: If the template has malformed syntax
            TemplateExecutionError: If rendering references an unknown name
                or indexes a non-mapping value
        """
        try:
            compiled = self.environment.from_string(template)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateParseError(e.message or str(e), e.lineno) from e

        try:
            rendered = compiled.render(ctx.as_template_vars())
        except (jinja2.TemplateError, TypeError, ValueError) as e:
            raise TemplateExecutionError(str(e)) from e

        return rendered.encode("utf-8")


_default_evaluator = TemplateEvaluator()


def process_template(template: str, ctx: TemplateContext) -> bytes:
    """Render a template with the shared default evaluator"""
    return _default_evaluator.process(template, ctx)
