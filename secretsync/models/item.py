"""1Password item models consumed read-only by the sync engine

Items arrive from either the Connect REST API (JSON documents) or the
1Password SDK (typed objects). Both are normalized into the same frozen
``Item`` so secret data synthesis never depends on the client in use.
"""

from datetime import datetime
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Signature of the callable that fetches a file's content by file ID
FileLoader = Callable[[str], Optional[bytes]]

DOCUMENT_CATEGORY = "Document"


def _enum_value(value: Any) -> str:
    """Return the plain string behind an SDK enum (or the value itself)"""
    if value is None:
        return ""
    return str(getattr(value, "value", value))


class ItemField(BaseModel):
    """A single labeled value on an item"""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    label: str = ""
    value: str = ""
    section_id: str = ""   # empty = unsectioned
    field_type: str = ""


class ItemSection(BaseModel):
    """A named grouping of fields; titles are not guaranteed unique"""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""


class ItemFile(BaseModel):
    """File attached to an item, with lazily loaded content"""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str
    size: int = 0
    loader: Optional[Callable[[], Optional[bytes]]] = Field(default=None, exclude=True, repr=False)

    def content(self) -> Optional[bytes]:
        """Load file content

        Returns:
            File bytes, or None when no loader is attached

        Raises:
            Exception: Whatever the underlying loader raises
        """
        if self.loader is None:
            return None
        return self.loader()


class Item(BaseModel):
    """1Password item representation

    ``fields`` keeps source order; later fields win over earlier fields
    that share a label wherever labels are flattened into a map.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""
    vault_id: str = ""
    version: int = 0
    tags: List[str] = Field(default_factory=list)
    fields: List[ItemField] = Field(default_factory=list)
    sections: List[ItemSection] = Field(default_factory=list)
    files: List[ItemFile] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def path(self) -> str:
        """Item path in the form vaults/{vault_id}/items/{id}"""
        return f"vaults/{self.vault_id}/items/{self.id}"

    @classmethod
    def from_connect_item(cls, payload: Dict[str, Any], file_loader: Optional[FileLoader] = None) -> "Item":
        """Build an Item from a Connect API item document

        Connect has no top-level sections array, so sections are collected
        from the field references in first-seen order.

        Args:
            payload: Item JSON as returned by the Connect API
            file_loader: Optional callable fetching file content by file ID

        Returns:
            Normalized Item
        """
        sections: Dict[str, ItemSection] = {}
        fields = []
        for field in payload.get("fields") or []:
            section = field.get("section") or {}
            section_id = section.get("id") or ""
            if section_id and section_id not in sections:
                sections[section_id] = ItemSection(id=section_id, title=section.get("label") or "")
            fields.append(ItemField(
                id=field.get("id") or "",
                label=field.get("label") or "",
                value=field.get("value") or "",
                section_id=section_id,
                field_type=field.get("type") or "",
            ))

        files = [
            _make_file(f.get("id") or "", f.get("name") or "", f.get("size") or 0, file_loader)
            for f in payload.get("files") or []
        ]

        return cls(
            id=payload.get("id") or "",
            vault_id=(payload.get("vault") or {}).get("id") or "",
            version=payload.get("version") or 0,
            tags=list(payload.get("tags") or []),
            fields=fields,
            sections=list(sections.values()),
            files=files,
            created_at=payload.get("createdAt"),
        )

    @classmethod
    def from_sdk_item(cls, item: Any, file_loader: Optional[FileLoader] = None) -> "Item":
        """Build an Item from a 1Password SDK item object

        Items of the Document category keep their file in ``document``
        rather than ``files``; it is appended to the file list.

        Args:
            item: ``onepassword.types.Item`` (or any object with the same attributes)
            file_loader: Optional callable fetching file content by file ID

        Returns:
            Normalized Item
        """
        sections = [
            ItemSection(id=section.id, title=section.title or "")
            for section in item.sections or []
        ]
        fields = [
            ItemField(
                id=field.id,
                label=field.title or "",
                value=field.value or "",
                section_id=field.section_id or "",
                field_type=_enum_value(field.field_type),
            )
            for field in item.fields or []
        ]
        files = [
            _make_file(f.attributes.id, f.attributes.name, f.attributes.size, file_loader)
            for f in item.files or []
        ]

        document = getattr(item, "document", None)
        if _enum_value(getattr(item, "category", None)) == DOCUMENT_CATEGORY and document is not None:
            files.append(_make_file(document.id, document.name, document.size, file_loader))

        return cls(
            id=item.id,
            vault_id=item.vault_id,
            version=int(item.version or 0),
            tags=list(item.tags or []),
            fields=fields,
            sections=sections,
            files=files,
            created_at=item.created_at,
        )

    @classmethod
    def from_sdk_item_overview(cls, overview: Any) -> "Item":
        """Build a metadata-only Item from an SDK item overview"""
        return cls(
            id=overview.id,
            vault_id=overview.vault_id,
            tags=list(overview.tags or []),
            created_at=overview.created_at,
        )


def _make_file(file_id: str, name: str, size: int, file_loader: Optional[FileLoader]) -> ItemFile:
    loader = partial(file_loader, file_id) if file_loader is not None else None
    return ItemFile(id=file_id, name=name, size=int(size or 0), loader=loader)
