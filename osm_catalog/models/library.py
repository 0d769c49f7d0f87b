"""Catalog tree: categories of downloadable documents.

The tree is built once per refresh and never mutated afterwards, so every
model is frozen and children are stored as tuples.
"""

from enum import Enum
from typing import Annotated, Iterator, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class DownloadType(str, Enum):
    """How a document is transferred. Only plain HTTP exists today."""

    HTTP = "Http"


class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["Document"] = "Document"
    name: str
    url: str = Field(..., description="Absolute source URL")
    size: int = Field(..., ge=0, description="Exact size in bytes")
    download_type: DownloadType = DownloadType.HTTP
    enabled: bool = Field(
        default=True,
        description="Offered by default; False only when another enabled document covers the same area",
    )


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["Category"] = "Category"
    name: str
    children: Tuple["LibraryItem", ...] = ()
    default_expanded: bool = Field(default=False, description="UI hint: show children by default")

    def walk(self) -> Iterator[Union["Category", Document]]:
        """Yield every descendant depth-first, in child order."""
        for child in self.children:
            yield child
            if isinstance(child, Category):
                yield from child.walk()

    def documents(self) -> Iterator[Document]:
        for item in self.walk():
            if isinstance(item, Document):
                yield item

    def total_size(self, *, enabled_only: bool = True) -> int:
        return sum(d.size for d in self.documents() if d.enabled or not enabled_only)

    def child(self, name: str) -> Union["Category", Document]:
        for c in self.children:
            if c.name == name:
                return c
        raise KeyError(name)


LibraryItem = Annotated[Union[Category, Document], Field(discriminator="type")]

Category.model_rebuild()
