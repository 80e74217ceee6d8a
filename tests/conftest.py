"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides descriptor fixtures shared by analyzer, CLI, and server tests.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local coral package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of coral modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name == "coral" or module_name.startswith("coral."):
        del sys.modules[module_name]

from google.protobuf import descriptor_pb2  # noqa: E402

from coral.analyzer import build_graph  # noqa: E402
from coral.domain import GraphModel  # noqa: E402

FieldProto = descriptor_pb2.FieldDescriptorProto


def make_field(
    name: str,
    number: int,
    field_type: int = FieldProto.TYPE_STRING,
    type_name: str = "",
    label: int = FieldProto.LABEL_OPTIONAL,
) -> descriptor_pb2.FieldDescriptorProto:
    fld = FieldProto(name=name, number=number, type=field_type, label=label)
    if type_name:
        fld.type_name = type_name
    return fld


def message_field(name: str, number: int, type_name: str) -> descriptor_pb2.FieldDescriptorProto:
    return make_field(name, number, FieldProto.TYPE_MESSAGE, type_name)


def enum_field(name: str, number: int, type_name: str) -> descriptor_pb2.FieldDescriptorProto:
    return make_field(name, number, FieldProto.TYPE_ENUM, type_name)


def build_user_file() -> descriptor_pb2.FileDescriptorProto:
    """user/v1/user.proto: UserService.GetUser(GetUserRequest) -> User."""
    return descriptor_pb2.FileDescriptorProto(
        name="user/v1/user.proto",
        package="user.v1",
        message_type=[
            descriptor_pb2.DescriptorProto(
                name="GetUserRequest",
                field=[make_field("user_id", 1)],
            ),
            descriptor_pb2.DescriptorProto(
                name="User",
                field=[
                    make_field("id", 1),
                    enum_field("status", 2, ".user.v1.UserStatus"),
                ],
            ),
        ],
        enum_type=[
            descriptor_pb2.EnumDescriptorProto(
                name="UserStatus",
                value=[
                    descriptor_pb2.EnumValueDescriptorProto(name="UNKNOWN", number=0),
                    descriptor_pb2.EnumValueDescriptorProto(name="ACTIVE", number=1),
                ],
            )
        ],
        service=[
            descriptor_pb2.ServiceDescriptorProto(
                name="UserService",
                method=[
                    descriptor_pb2.MethodDescriptorProto(
                        name="GetUser",
                        input_type=".user.v1.GetUserRequest",
                        output_type=".user.v1.User",
                    )
                ],
            )
        ],
    )


def build_timestamp_file() -> descriptor_pb2.FileDescriptorProto:
    return descriptor_pb2.FileDescriptorProto(
        name="google/protobuf/timestamp.proto",
        package="google.protobuf",
        message_type=[
            descriptor_pb2.DescriptorProto(
                name="Timestamp",
                field=[
                    make_field("seconds", 1, FieldProto.TYPE_INT64),
                    make_field("nanos", 2, FieldProto.TYPE_INT32),
                ],
            )
        ],
    )


@pytest.fixture
def user_file() -> descriptor_pb2.FileDescriptorProto:
    return build_user_file()


@pytest.fixture
def timestamp_file() -> descriptor_pb2.FileDescriptorProto:
    return build_timestamp_file()


@pytest.fixture
def user_descriptor_set() -> descriptor_pb2.FileDescriptorSet:
    return descriptor_pb2.FileDescriptorSet(file=[build_user_file()])


@pytest.fixture
def descriptor_file(
    tmp_path: Path,
) -> Callable[[descriptor_pb2.FileDescriptorSet], Path]:
    """Write a descriptor set to disk, as `buf build -o FILE` would."""

    def write(fds: descriptor_pb2.FileDescriptorSet, name: str = "image.binpb") -> Path:
        path = tmp_path / name
        path.write_bytes(fds.SerializeToString())
        return path

    return write


@pytest.fixture
def user_graph(user_descriptor_set: descriptor_pb2.FileDescriptorSet) -> GraphModel:
    return build_graph(user_descriptor_set)
