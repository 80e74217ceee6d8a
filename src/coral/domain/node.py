"""Node types for the proto dependency graph.

Details are a closed union discriminated by ``kind`` so that the JSON shape
matches the frontend's TypeScript discriminated union.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GraphBaseModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class NodeType(str, Enum):
    """Kind of definition a node stands for."""

    SERVICE = "service"
    MESSAGE = "message"
    ENUM = "enum"
    EXTERNAL = "external"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class MethodSignature(GraphBaseModel):
    """RPC method with short input/output type names."""

    name: str
    input_type: str
    output_type: str


class FieldInfo(GraphBaseModel):
    name: str
    number: int
    type_name: str
    label: str


class EnumValue(GraphBaseModel):
    name: str
    number: int


class MessageDef(GraphBaseModel):
    """Message definition embedded in Service details for inline request/response fields."""

    name: str
    fields: tuple[FieldInfo, ...] = ()


class ServiceDetails(GraphBaseModel):
    kind: Literal["Service"] = "Service"
    methods: tuple[MethodSignature, ...] = ()
    messages: tuple[MessageDef, ...] = ()


class MessageDetails(GraphBaseModel):
    kind: Literal["Message"] = "Message"
    fields: tuple[FieldInfo, ...] = ()


class EnumDetails(GraphBaseModel):
    kind: Literal["Enum"] = "Enum"
    values: tuple[EnumValue, ...] = ()


class ExternalDetails(GraphBaseModel):
    kind: Literal["External"] = "External"


NodeDetails = Annotated[
    ServiceDetails | MessageDetails | EnumDetails | ExternalDetails,
    Field(discriminator="kind"),
]


class Node(GraphBaseModel):
    """A service, message, enum, or external type in the graph."""

    id: str
    node_type: NodeType = Field(alias="type")
    package: str
    label: str
    file: str
    details: NodeDetails
