"""
Documentation tree model.

The ``DocTree`` is the JSON document stored in a component's
``package-docs`` custom section: package docs plus, per world, the world's
own docs and the docs of its exported and imported functions.

Manifesto:
    The tree is written by one tool and read by others, possibly of a
    different version. Reading is therefore permissive: unknown fields
    (``stability``, ``interfaces``, ``interface_exports``, ...) are kept on
    the model untouched and ignored by every consumer, never rejected.
    A bare string function entry is its docs text, and a ``null`` world,
    function or collection reads as empty.
    Absence of ``docs`` means "undocumented" and is distinct from ``""``.
    A present ``func_exports`` key, even an empty one, hides ``functions``.

Architecture:
    ::

        DocTree
        ├── docs: str | None
        └── worlds: {world name → WorldDocs}
                    ├── docs: str | None
                    ├── func_exports: {function → FuncDocs}
                    ├── func_imports: {function → FuncDocs}
                    └── functions: {function → FuncDocs} | None   (legacy)

Guardrails:
    ❌ DON'T: Merge ``func_exports`` and ``functions``
    ✅ DO: Go through ``WorldDocs.exported_functions()``

Tags:
    model, pydantic, package-docs, wit

Doc-Types:
    - API Reference
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _null_as_empty(value: Any) -> Any:
    return {} if value is None else value


class FuncDocs(BaseModel):
    """Documentation of one world-level function.

    A bare string entry is read as the docs text; ``null`` as undocumented.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    docs: str | None = Field(default=None, description="Doc comment text, None if undocumented")

    @model_validator(mode="before")
    @classmethod
    def _accept_shorthand(cls, data: Any) -> Any:
        if data is None or isinstance(data, str):
            return {"docs": data}
        return data


class WorldDocs(BaseModel):
    """Documentation of one world and the functions it imports and exports."""

    model_config = ConfigDict(extra="allow", frozen=True)

    docs: str | None = Field(default=None, description="World doc comment text")
    func_exports: dict[str, FuncDocs] = Field(default_factory=dict)
    func_imports: dict[str, FuncDocs] = Field(default_factory=dict)
    functions: dict[str, FuncDocs] | None = Field(
        default=None,
        description="Legacy name for func_exports written by older producers",
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_null(cls, data: Any) -> Any:
        return _null_as_empty(data)

    @field_validator("func_exports", "func_imports", mode="before")
    @classmethod
    def _null_collection(cls, value: Any) -> Any:
        return _null_as_empty(value)

    def exported_functions(self) -> dict[str, FuncDocs]:
        """Exports collection: ``func_exports`` if the key was given, else the ``functions`` alias."""
        if "func_exports" in self.model_fields_set:
            return self.func_exports
        return self.functions or {}


class DocTree(BaseModel):
    """Root of the package-docs payload."""

    model_config = ConfigDict(extra="allow", frozen=True)

    docs: str | None = Field(default=None, description="Package-level doc comment text")
    worlds: dict[str, WorldDocs] = Field(default_factory=dict)

    @field_validator("worlds", mode="before")
    @classmethod
    def _null_worlds(cls, value: Any) -> Any:
        return _null_as_empty(value)

    def to_json_dict(self) -> dict:
        """Plain JSON-compatible dict, ``None`` values omitted."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_source_dict(self) -> dict:
        """The fields the tree was built from, explicit ``null`` values included."""
        return self.model_dump(mode="json", exclude_unset=True)


__all__ = ["DocTree", "FuncDocs", "WorldDocs"]
