"""Template context built from a 1Password item"""

from dataclasses import dataclass, field
from typing import Any, Dict

from secretsync.models.item import Item


@dataclass
class TemplateContext:
    """Lookup views over an item's fields for template rendering

    Attributes:
        fields: Flat map field_label -> value. If labels repeat, the last
            field in item order wins.
        sections: Nested map section_title -> field_label -> value.
        fields_by_id: field_id -> value, for labels that collide.
    """
    fields: Dict[str, str] = field(default_factory=dict)
    sections: Dict[str, Dict[str, str]] = field(default_factory=dict)
    fields_by_id: Dict[str, str] = field(default_factory=dict)

    def as_template_vars(self) -> Dict[str, Any]:
        """Names the views are exposed under inside a template"""
        return {
            "Fields": self.fields,
            "Sections": self.sections,
            "FieldsByID": self.fields_by_id,
        }


def build_template_context(item: Item) -> TemplateContext:
    """Construct a TemplateContext from an item in a single pass over its fields"""
    ctx = TemplateContext()

    section_titles: Dict[str, str] = {}  # section_id -> title
    for section in item.sections:
        section_titles[section.id] = section.title
        ctx.sections.setdefault(section.title, {})

    for item_field in item.fields:
        ctx.fields[item_field.label] = item_field.value
        ctx.fields_by_id[item_field.id] = item_field.value

        if item_field.section_id:
            # Section referenced but not declared: bucket under the raw ID
            title = section_titles.get(item_field.section_id) or item_field.section_id
        else:
            title = ""
        ctx.sections.setdefault(title, {})[item_field.label] = item_field.value

    return ctx
