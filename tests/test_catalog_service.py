import os
from datetime import datetime, timedelta

import pytest
from bson import ObjectId

from shared.errors import Forbidden, InvalidInput, NotFound, PayloadTooLarge

from helpers import image

DESCRIPTION = "A sturdy little gadget for every desk."


def create(services, vendor_id, **overrides):
    fields = dict(
        product_name="Desk Fan",
        category="Gadget",
        description=DESCRIPTION,
        price="19.99",
        thumbnail=image(),
    )
    fields.update(overrides)
    return services.catalog.create(vendor_id, **fields)


def set_timestamp(services, product, field, when):
    services.database.products.update_one({"_id": ObjectId(product["_id"])}, {"$set": {field: when}})


def product_count(services, vendor):
    return services.accounts.get_by_id(vendor["_id"])["products"]


# ----------------------------------------------------------------------
# create
# ----------------------------------------------------------------------

def test_create_requires_thumbnail(services, vendor):
    with pytest.raises(InvalidInput):
        create(services, vendor["_id"], thumbnail=None)
    assert product_count(services, vendor) == 0


def test_create_rejects_three_megabyte_thumbnail(services, vendor):
    with pytest.raises(PayloadTooLarge):
        create(services, vendor["_id"], thumbnail=image(size=3_000_000))
    assert services.database.products.count_documents({}) == 0
    assert product_count(services, vendor) == 0


def test_create_with_one_megabyte_thumbnail(services, vendor):
    product = create(services, vendor["_id"], thumbnail=image(size=1_000_000))

    assert product["vendor"] == vendor["_id"]
    assert product["price"] == 19.99
    assert product["shopName"] == "Ada's Shop"
    assert product["contact"] == 5551234
    assert os.path.exists(services.media.path_for(product["thumbnail"]))
    assert product_count(services, vendor) == 1


@pytest.mark.parametrize("overrides", [
    {"product_name": ""},
    {"category": None},
    {"description": None},
    {"category": "Furniture"},
    {"price": "free"},
    {"price": -1},
])
def test_create_validation(services, vendor, overrides):
    with pytest.raises(InvalidInput):
        create(services, vendor["_id"], **overrides)


def test_create_for_unknown_vendor(services):
    with pytest.raises(NotFound):
        create(services, "64b7f0c2a1b2c3d4e5f60718")


def test_snapshot_fields_do_not_follow_profile_edits(services, vendor):
    product = create(services, vendor["_id"])
    services.database.users.update_one({"_id": ObjectId(vendor["_id"])}, {"$set": {"shopName": "Renamed"}})
    assert services.catalog.get_by_id(product["_id"])["shopName"] == "Ada's Shop"


# ----------------------------------------------------------------------
# queries
# ----------------------------------------------------------------------

def test_list_orders_by_most_recently_updated(services, vendor):
    older = create(services, vendor["_id"], product_name="Older")
    newer = create(services, vendor["_id"], product_name="Newer")
    base = datetime(2024, 1, 1)
    set_timestamp(services, older, "updatedAt", base + timedelta(hours=2))
    set_timestamp(services, newer, "updatedAt", base + timedelta(hours=1))

    assert [p["productName"] for p in services.catalog.list()] == ["Older", "Newer"]


def test_list_by_category_exact_match_newest_first(services, vendor):
    first = create(services, vendor["_id"], product_name="First")
    second = create(services, vendor["_id"], product_name="Second")
    create(services, vendor["_id"], product_name="Shirt", category="Fashion")
    base = datetime(2024, 1, 1)
    set_timestamp(services, first, "createdAt", base)
    set_timestamp(services, second, "createdAt", base + timedelta(minutes=5))

    gadgets = services.catalog.list_by_category("Gadget")
    assert [p["productName"] for p in gadgets] == ["Second", "First"]
    assert services.catalog.list_by_category("gadget") == []


def test_list_by_vendor(services, vendor, other_vendor):
    mine = create(services, vendor["_id"])
    create(services, other_vendor["_id"])

    assert [p["_id"] for p in services.catalog.list_by_vendor(vendor["_id"])] == [mine["_id"]]
    assert services.catalog.list_by_vendor("not-an-id") == []


@pytest.mark.parametrize("product_id", ["64b7f0c2a1b2c3d4e5f60718", "bogus"])
def test_get_unknown_product(services, product_id):
    with pytest.raises(NotFound):
        services.catalog.get_by_id(product_id)


# ----------------------------------------------------------------------
# edit
# ----------------------------------------------------------------------

def test_edit_text_only_keeps_thumbnail(services, vendor):
    product = create(services, vendor["_id"])
    edited = services.catalog.edit(
        product["_id"], vendor["_id"], "Desk Fan Pro", "Electronic", "Now with three speeds."
    )

    assert edited["productName"] == "Desk Fan Pro"
    assert edited["category"] == "Electronic"
    assert edited["thumbnail"] == product["thumbnail"]


def test_edit_with_new_thumbnail_keeps_old_file(services, vendor):
    product = create(services, vendor["_id"])
    edited = services.catalog.edit(
        product["_id"], vendor["_id"], "Desk Fan", "Gadget", DESCRIPTION, thumbnail=image(name="new.webp")
    )

    assert edited["thumbnail"] != product["thumbnail"]
    assert edited["thumbnail"].endswith(".webp")
    assert os.path.exists(services.media.path_for(product["thumbnail"]))
    assert os.path.exists(services.media.path_for(edited["thumbnail"]))


def test_edit_by_non_owner_is_forbidden(services, vendor, other_vendor):
    product = create(services, vendor["_id"])
    with pytest.raises(Forbidden):
        services.catalog.edit(product["_id"], other_vendor["_id"], "Mine now", "Gadget", DESCRIPTION)


def test_edit_by_non_owner_with_invalid_payload_is_still_forbidden(services, vendor, other_vendor):
    product = create(services, vendor["_id"])
    with pytest.raises(Forbidden):
        services.catalog.edit(product["_id"], other_vendor["_id"], "", "Gadget", "short")
    assert services.catalog.get_by_id(product["_id"])["productName"] == "Desk Fan"


def test_edit_requires_description_of_twelve_characters(services, vendor):
    product = create(services, vendor["_id"])
    with pytest.raises(InvalidInput):
        services.catalog.edit(product["_id"], vendor["_id"], "Desk Fan", "Gadget", "too short")
    assert services.catalog.edit(product["_id"], vendor["_id"], "Desk Fan", "Gadget", "x" * 12)


@pytest.mark.parametrize("description", [123456789012345, ["word"] * 12, None])
def test_edit_rejects_non_string_description(services, vendor, description):
    product = create(services, vendor["_id"])
    with pytest.raises(InvalidInput):
        services.catalog.edit(product["_id"], vendor["_id"], "Desk Fan", "Gadget", description)
    assert services.catalog.get_by_id(product["_id"])["description"] == DESCRIPTION


def test_edit_unknown_product(services, vendor):
    with pytest.raises(NotFound):
        services.catalog.edit("64b7f0c2a1b2c3d4e5f60718", vendor["_id"], "Fan", "Gadget", DESCRIPTION)


def test_edit_oversized_thumbnail(services, vendor):
    product = create(services, vendor["_id"])
    with pytest.raises(PayloadTooLarge):
        services.catalog.edit(
            product["_id"], vendor["_id"], "Fan", "Gadget", DESCRIPTION, thumbnail=image(size=2_000_001)
        )


# ----------------------------------------------------------------------
# delete
# ----------------------------------------------------------------------

def test_delete_removes_file_record_and_count(services, vendor):
    product = create(services, vendor["_id"])
    create(services, vendor["_id"])
    assert product_count(services, vendor) == 2

    message = services.catalog.delete(product["_id"], vendor["_id"])

    assert message == f"Product {product['_id']} deleted successfully."
    assert not os.path.exists(services.media.path_for(product["thumbnail"]))
    with pytest.raises(NotFound):
        services.catalog.get_by_id(product["_id"])
    assert product_count(services, vendor) == 1


def test_delete_keeps_record_when_thumbnail_is_missing(services, vendor):
    product = create(services, vendor["_id"])
    os.remove(services.media.path_for(product["thumbnail"]))

    with pytest.raises(NotFound):
        services.catalog.delete(product["_id"], vendor["_id"])

    assert services.catalog.get_by_id(product["_id"])["_id"] == product["_id"]
    assert product_count(services, vendor) == 1


def test_delete_by_non_owner_is_forbidden(services, vendor, other_vendor):
    product = create(services, vendor["_id"])
    with pytest.raises(Forbidden):
        services.catalog.delete(product["_id"], other_vendor["_id"])
    assert os.path.exists(services.media.path_for(product["thumbnail"]))
