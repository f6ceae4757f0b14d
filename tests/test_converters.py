import pytest
from pydantic import ValidationError

from docquery.converters import (
    CouchbaseDataConverter,
    CouchbaseDataConverterWithReflection,
    SyncGatewayDataConverter,
    SyncGatewayDataConverterWithReflection,
    document_id_field,
    select_converter,
)
from sample_models import Account, Label, Tag, Unmarked, User

ROW = {"data": {"name": "Anna", "age": 30}, "id": "user::1"}
GATEWAY_ROW = {
    "data": {"name": "Anna", "_sync": {"rev": "1-abc"}, "_rev": "1-abc"},
    "id": "user::1",
}


@pytest.mark.parametrize(
    "with_sync_gateway, use_default_id_fields, expected",
    [
        (False, True, CouchbaseDataConverter),
        (False, False, CouchbaseDataConverterWithReflection),
        (True, True, SyncGatewayDataConverter),
        (True, False, SyncGatewayDataConverterWithReflection),
    ],
)
def test_select_converter(with_sync_gateway, use_default_id_fields, expected):
    assert type(select_converter(with_sync_gateway, use_default_id_fields)) is expected


def test_default_id_into_model():
    user = CouchbaseDataConverter().convert(ROW, User)
    assert user == User(id="user::1", name="Anna", age=30)


def test_default_id_into_dict():
    doc = CouchbaseDataConverter().convert(ROW, dict)
    assert doc == {"name": "Anna", "age": 30, "id": "user::1"}


def test_row_is_not_mutated():
    CouchbaseDataConverter().convert(ROW, dict)
    assert "id" not in ROW["data"]


def test_reflection_uses_marked_field():
    account = CouchbaseDataConverterWithReflection().convert(
        {"data": {"name": "main"}, "id": "acct::9"}, Account
    )
    assert account.key == "acct::9"


def test_reflection_on_dataclass():
    tag = CouchbaseDataConverterWithReflection().convert(
        {"data": {"label": "Red"}, "id": "tag::red"}, Tag
    )
    assert tag == Tag(label="Red", slug="tag::red")


def test_reflection_without_marker_skips_id():
    rec = CouchbaseDataConverterWithReflection().convert({"data": {"name": "x"}, "id": "k"}, Unmarked)
    assert rec == Unmarked(name="x")


def test_document_id_field():
    assert document_id_field(Account) == "key"
    assert document_id_field(Tag) == "slug"
    assert document_id_field(User) is None
    assert document_id_field(dict) is None


def test_sync_gateway_strips_metadata():
    doc = SyncGatewayDataConverter().convert(GATEWAY_ROW, dict)
    assert doc == {"name": "Anna", "id": "user::1"}


def test_sync_gateway_reflection():
    account = SyncGatewayDataConverterWithReflection().convert(GATEWAY_ROW, Account)
    assert account == Account(key="user::1", name="Anna")


def test_conversion_failure_propagates():
    with pytest.raises(ValidationError):
        CouchbaseDataConverter().convert({"data": {"age": "old"}, "id": "u"}, User)


def test_dataclass_ignores_undeclared_properties():
    tag = CouchbaseDataConverterWithReflection().convert(
        {"data": {"label": "Red", "color": "r"}, "id": "tag::red"}, Tag
    )
    assert tag == Tag(label="Red", slug="tag::red")


def test_default_id_on_dataclass_without_id_field():
    label = CouchbaseDataConverter().convert({"data": {"label": "Red", "color": "r"}, "id": "t"}, Label)
    assert label == Label(label="Red")
