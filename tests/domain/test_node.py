"""Tests for domain/node.py - node types and their JSON shape."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from coral.domain import (
    EnumDetails,
    EnumValue,
    ExternalDetails,
    FieldInfo,
    MessageDef,
    MessageDetails,
    MethodSignature,
    Node,
    NodeDetails,
    NodeType,
    ServiceDetails,
)


class TestNodeType:
    def test_values(self) -> None:
        assert [t.value for t in NodeType] == ["service", "message", "enum", "external"]

    def test_display_name(self) -> None:
        assert NodeType.SERVICE.display_name == "Service"
        assert NodeType.EXTERNAL.display_name == "External"


class TestDetailsUnion:
    """Details are discriminated by ``kind``."""

    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"kind": "Service", "methods": [], "messages": []}, ServiceDetails),
            ({"kind": "Message", "fields": []}, MessageDetails),
            ({"kind": "Enum", "values": []}, EnumDetails),
            ({"kind": "External"}, ExternalDetails),
        ],
    )
    def test_parses_by_kind(self, payload: dict, expected: type) -> None:
        details = TypeAdapter(NodeDetails).validate_python(payload)
        assert isinstance(details, expected)

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TypeAdapter(NodeDetails).validate_python({"kind": "Oneof"})


class TestNodeSerialization:
    """Wire shape consumed by the frontend."""

    def test_service_node(self) -> None:
        node = Node(
            id="user.v1.UserService",
            node_type=NodeType.SERVICE,
            package="user.v1",
            label="UserService",
            file="user/v1/user.proto",
            details=ServiceDetails(
                methods=(
                    MethodSignature(name="GetUser", input_type="GetUserRequest", output_type="User"),
                ),
                messages=(
                    MessageDef(
                        name="GetUserRequest",
                        fields=(
                            FieldInfo(name="user_id", number=1, type_name="string", label="optional"),
                        ),
                    ),
                ),
            ),
        )

        assert node.model_dump(mode="json", by_alias=True) == {
            "id": "user.v1.UserService",
            "type": "service",
            "package": "user.v1",
            "label": "UserService",
            "file": "user/v1/user.proto",
            "details": {
                "kind": "Service",
                "methods": [
                    {"name": "GetUser", "inputType": "GetUserRequest", "outputType": "User"}
                ],
                "messages": [
                    {
                        "name": "GetUserRequest",
                        "fields": [
                            {
                                "name": "user_id",
                                "number": 1,
                                "typeName": "string",
                                "label": "optional",
                            }
                        ],
                    }
                ],
            },
        }

    def test_external_node(self) -> None:
        node = Node(
            id="google.protobuf.Timestamp",
            node_type=NodeType.EXTERNAL,
            package="google.protobuf",
            label="Timestamp",
            file="google/protobuf/timestamp.proto",
            details=ExternalDetails(),
        )

        data = node.model_dump(mode="json", by_alias=True)

        assert data["type"] == "external"
        assert data["details"] == {"kind": "External"}

    def test_parse_from_aliases(self) -> None:
        node = Node.model_validate(
            {
                "id": "a.v1.State",
                "type": "enum",
                "package": "a.v1",
                "label": "State",
                "file": "a.proto",
                "details": {"kind": "Enum", "values": [{"name": "OPEN", "number": 0}]},
            }
        )

        assert node.node_type == NodeType.ENUM
        assert node.details == EnumDetails(values=(EnumValue(name="OPEN", number=0),))

    def test_frozen(self) -> None:
        value = EnumValue(name="OPEN", number=0)
        with pytest.raises(ValidationError):
            value.number = 1  # type: ignore[misc]
