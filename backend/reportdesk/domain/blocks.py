"""
Block content variants.

A block is a ``type`` tag plus a JSON ``content`` payload. On the way in
the payload is parsed into one dataclass per variant; on the way out it is
dumped back to plain JSON. Unknown tags are kept as ``UnknownContent`` so
stored data is never lost and never raises.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union


class BlockType(str, Enum):
    HEADING = "heading"
    TEXT = "text"
    CHECKLIST = "checklist"
    IMAGE = "image"
    PHOTO_UPLOAD = "photo_upload"
    DATA_TABLE = "data_table"
    NOTES = "notes"
    INVOICE_DATA = "invoice_data"

    @classmethod
    def lookup(cls, value: str) -> "BlockType | None":
        try:
            return cls(value)
        except ValueError:
            return None


# Types offered by the block type selector, per collection
REPORT_BLOCK_TYPES = frozenset({
    BlockType.HEADING,
    BlockType.TEXT,
    BlockType.CHECKLIST,
    BlockType.IMAGE,
    BlockType.PHOTO_UPLOAD,
    BlockType.DATA_TABLE,
    BlockType.NOTES,
})
INVOICE_BLOCK_TYPES = REPORT_BLOCK_TYPES | {BlockType.INVOICE_DATA}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ("" if value is None else str(value))


def _dicts(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


@dataclass
class HeadingContent:
    text: str = "New Heading"
    level: int = 2

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "HeadingContent":
        level = raw.get("level", 2)
        # Older templates stored "h2" style levels
        if isinstance(level, str):
            level = level.lower().lstrip("h")
        try:
            level = int(level)
        except (TypeError, ValueError):
            level = 2
        return cls(text=_text(raw.get("text")), level=min(max(level, 1), 3))


@dataclass
class TextContent:
    text: str = ""

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "TextContent":
        return cls(text=_text(raw.get("text")))


@dataclass
class ChecklistItem:
    text: str = ""
    checked: bool = False


@dataclass
class ChecklistContent:
    items: List[ChecklistItem] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "ChecklistContent":
        return cls(items=[
            ChecklistItem(text=_text(item.get("text")), checked=bool(item.get("checked")))
            for item in _dicts(raw.get("items"))
        ])


@dataclass
class ImageContent:
    url: str = ""
    alt: str = ""

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "ImageContent":
        return cls(url=_text(raw.get("url")), alt=_text(raw.get("alt")))


@dataclass
class Photo:
    url: str
    filename: str = ""
    caption: str = ""


@dataclass
class PhotoUploadContent:
    photos: List[Photo] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "PhotoUploadContent":
        return cls(photos=[
            Photo(
                url=_text(photo.get("url")),
                filename=_text(photo.get("filename")),
                caption=_text(photo.get("caption")),
            )
            for photo in _dicts(raw.get("photos"))
        ])


@dataclass
class TableRow:
    label: str = ""
    value: str = ""


@dataclass
class DataTableContent:
    title: str = ""
    rows: List[TableRow] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "DataTableContent":
        return cls(
            title=_text(raw.get("title")),
            rows=[
                TableRow(label=_text(row.get("label")), value=_text(row.get("value")))
                for row in _dicts(raw.get("rows"))
            ],
        )


@dataclass
class NotesContent:
    title: str = ""
    text: str = ""

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "NotesContent":
        return cls(title=_text(raw.get("title")), text=_text(raw.get("text")))


@dataclass
class ServiceLine:
    description: str = ""
    cost: str = ""


INVOICE_TEXT_FIELDS = (
    "date", "inspector", "company", "purchaseOrder", "invoiceNumber",
    "startTime", "finishTime", "siteTime", "offsiteHours", "totalHours",
    "consumables", "total", "gst", "includesGst", "contactName",
    "contactPhone", "signature",
)


@dataclass
class InvoiceDataContent:
    servicesSupplied: List[ServiceLine] = field(default_factory=lambda: [ServiceLine()])
    fields: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "InvoiceDataContent":
        return cls(
            servicesSupplied=[
                ServiceLine(description=_text(s.get("description")), cost=_text(s.get("cost")))
                for s in _dicts(raw.get("servicesSupplied"))
            ],
            fields={
                name: _text(raw[name])
                for name in INVOICE_TEXT_FIELDS
                if raw.get(name) is not None
            },
        )

    def dump(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.fields)
        data["servicesSupplied"] = [asdict(s) for s in self.servicesSupplied]
        return data


@dataclass
class UnknownContent:
    type: str
    raw: Any = None

    def dump(self) -> Any:
        return self.raw


BlockContent = Union[
    HeadingContent,
    TextContent,
    ChecklistContent,
    ImageContent,
    PhotoUploadContent,
    DataTableContent,
    NotesContent,
    InvoiceDataContent,
    UnknownContent,
]

CONTENT_VARIANTS = {
    BlockType.HEADING: HeadingContent,
    BlockType.TEXT: TextContent,
    BlockType.CHECKLIST: ChecklistContent,
    BlockType.IMAGE: ImageContent,
    BlockType.PHOTO_UPLOAD: PhotoUploadContent,
    BlockType.DATA_TABLE: DataTableContent,
    BlockType.NOTES: NotesContent,
    BlockType.INVOICE_DATA: InvoiceDataContent,
}


def parse_content(block_type: str, raw: Any) -> BlockContent:
    """Parse a stored payload into its variant. Never raises."""
    known = BlockType.lookup(block_type)
    if known is None:
        return UnknownContent(type=block_type, raw=raw)
    return CONTENT_VARIANTS[known].from_raw(raw if isinstance(raw, dict) else {})


def dump_content(content: BlockContent) -> Any:
    if isinstance(content, (InvoiceDataContent, UnknownContent)):
        return content.dump()
    return asdict(content)


def default_content(block_type: str) -> Dict[str, Any]:
    """Content of a freshly added block; ``{}`` for unrecognised types."""
    known = BlockType.lookup(block_type)
    if known is None:
        return {}
    if known is BlockType.HEADING:
        return {"text": "New Heading", "level": 2}
    return dump_content(CONTENT_VARIANTS[known]())


def normalize_content(block_type: str, raw: Any) -> Any:
    """Round-trip through the variant so stored content keeps its schema."""
    return dump_content(parse_content(block_type, raw))


def render_capability(block_type: str, content: Any) -> Dict[str, Any]:
    """
    Describe how the editor renders a block.

    Every known variant is listed explicitly; anything else gets the
    "unsupported" placeholder instead of an error.
    """
    parsed = parse_content(block_type, content)

    if isinstance(parsed, HeadingContent):
        return {"component": "heading", "editable": True, "level": parsed.level}
    if isinstance(parsed, TextContent):
        return {"component": "text", "editable": True}
    if isinstance(parsed, ChecklistContent):
        return {
            "component": "checklist",
            "editable": True,
            "checked": sum(1 for item in parsed.items if item.checked),
            "total": len(parsed.items),
        }
    if isinstance(parsed, ImageContent):
        return {"component": "image", "editable": True, "has_image": bool(parsed.url)}
    if isinstance(parsed, PhotoUploadContent):
        return {"component": "photo_upload", "editable": True, "uploads": True, "count": len(parsed.photos)}
    if isinstance(parsed, DataTableContent):
        return {"component": "data_table", "editable": True, "rows": len(parsed.rows)}
    if isinstance(parsed, NotesContent):
        return {"component": "notes", "editable": True}
    if isinstance(parsed, InvoiceDataContent):
        return {"component": "invoice_data", "editable": True, "signature": "signature" in parsed.fields}

    return {
        "component": "unsupported",
        "editable": False,
        "message": f"Unknown block type: {block_type}",
    }
