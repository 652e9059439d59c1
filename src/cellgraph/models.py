"""Core data models for the cell graph.

Uses Pydantic v2 for validating endpoint descriptors and graph documents,
ULID for sortable unique cell IDs.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ulid import ULID


def generate_id() -> str:
    """Generate a ULID (sortable, unique identifier)."""
    return str(ULID())


class CellTypeError(TypeError):
    """Raised when a cell does not carry a string `type` discriminator."""


class GraphDocumentError(ValueError):
    """Raised when a graph document cannot be loaded."""


class LayerError(KeyError):
    """Raised for unknown layers or forbidden layer removals."""


class Endpoint(BaseModel):
    """A link endpoint: a reference to a cell or a free-floating point.

    A reference carries `id` (and optionally `port`); a free point carries
    `x`/`y` only. Any other keys (anchors, magnets, ...) are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    port: str | None = None
    x: float | None = None
    y: float | None = None

    @property
    def is_connected(self) -> bool:
        return bool(self.id)

    def to_descriptor(self) -> dict:
        """Plain-dict form stored in link attributes."""
        return self.model_dump(exclude_none=True)


def endpoint_id(descriptor: Any) -> str | None:
    """Return the cell id an endpoint descriptor refers to, if any.

    Malformed descriptors are treated as free points.
    """
    if isinstance(descriptor, dict):
        value = descriptor.get("id")
        return value if value else None
    return None


def normalize_endpoint(descriptor: Any) -> dict:
    """Validate an endpoint descriptor into its plain-dict form.

    Anything that is not a mapping becomes the origin point.
    """
    if not isinstance(descriptor, dict):
        return {"x": 0, "y": 0}
    try:
        return Endpoint.model_validate(descriptor).to_descriptor()
    except ValidationError:
        # Keep what was given; adjacency treats it as a free point
        return dict(descriptor)


class LayerSpec(BaseModel):
    """A named z-order partition as stored in a graph document."""

    model_config = ConfigDict(extra="allow")

    id: str


class GraphDocument(BaseModel):
    """Exchange form of a graph.

    `{cells: [...], cellLayers?: [...], defaultCellLayer?: id, ...}`; any other
    top-level keys are graph attributes.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    cells: list[dict[str, Any]]
    cell_layers: list[LayerSpec] | None = Field(default=None, alias="cellLayers")
    default_cell_layer: str | None = Field(default=None, alias="defaultCellLayer")

    @classmethod
    def load(cls, data: Any) -> "GraphDocument":
        """Validate a raw document, raising GraphDocumentError on failure."""
        if not isinstance(data, dict):
            raise GraphDocumentError("Graph JSON must be an object.")
        if data.get("cells") is None:
            raise GraphDocumentError("Graph JSON must contain cells array.")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise GraphDocumentError(f"Invalid graph JSON: {e}") from e

    @property
    def attributes(self) -> dict[str, Any]:
        """Top-level keys that are not cells or layers."""
        return dict(self.model_extra or {})
