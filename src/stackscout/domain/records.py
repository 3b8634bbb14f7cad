"""Records returned by the three discovery actions.

All records are frozen pydantic models validated at construction, so a
consumer never sees an entry with an empty package name or empty rules.

Generator documentation is three-valued. A command may carry help text,
carry none at all, or be declared explicitly undocumented. The distinction
is kept as a discriminated union; on the wire (JSON mode) the three cases
become a string, ``null`` and ``false``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_serializer, field_validator


class PackageRuleEntry(BaseModel):
    """Full text of one package's usage-rules document."""

    model_config = {"frozen": True}

    package: str = Field(min_length=1)
    rules: str = Field(min_length=1)


class ResourceDescriptor(BaseModel):
    """A domain-modeled resource and the domain that owns it."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    domain: str = Field(min_length=1)


# --- Generator documentation variants ---


class Documented(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["documented"] = "documented"
    text: str


class Undocumented(BaseModel):
    """No documentation attribute present."""

    model_config = {"frozen": True}

    kind: Literal["undocumented"] = "undocumented"


class ExplicitlyEmpty(BaseModel):
    """Documentation deliberately switched off by the command's author."""

    model_config = {"frozen": True}

    kind: Literal["explicitly_empty"] = "explicitly_empty"


GeneratorDocs = Annotated[
    Documented | Undocumented | ExplicitlyEmpty,
    Field(discriminator="kind"),
]

RawDocs = str | None | Literal[False]


def docs_from_raw(raw: Any) -> Documented | Undocumented | ExplicitlyEmpty:
    """Map a raw documentation value (``str``, ``None`` or ``False``) to its variant.

    Raises:
        TypeError: *raw* is any other value (``True``, ``0``, bytes, ...).
    """
    if raw is False:
        return ExplicitlyEmpty()
    if raw is None:
        return Undocumented()
    if isinstance(raw, str):
        return Documented(text=raw)
    msg = f"docs must be a string, None or False, got {type(raw).__name__}"
    raise TypeError(msg)


def docs_to_raw(docs: Documented | Undocumented | ExplicitlyEmpty) -> RawDocs:
    """Inverse of :func:`docs_from_raw`."""
    if isinstance(docs, Documented):
        return docs.text
    if isinstance(docs, ExplicitlyEmpty):
        return False
    return None


class GeneratorDescriptor(BaseModel):
    """One invocable generator command and its documentation."""

    model_config = {"frozen": True}

    command: str = Field(min_length=1)
    docs: GeneratorDocs

    @field_validator("docs", mode="before")
    @classmethod
    def _coerce_raw_docs(cls, value: Any) -> Any:
        # Variant instances and their dict dumps go through the discriminator.
        if isinstance(value, (BaseModel, dict)):
            return value
        try:
            return docs_from_raw(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_serializer("docs", when_used="json")
    def _docs_wire(self, docs: Documented | Undocumented | ExplicitlyEmpty) -> RawDocs:
        return docs_to_raw(docs)

    @property
    def raw_docs(self) -> RawDocs:
        return docs_to_raw(self.docs)
