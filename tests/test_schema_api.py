"""Schema administration endpoint tests."""

import uuid

import pytest


async def _schema(client, headers, schema_id):
    response = await client.get(f"/api/schema/{schema_id}", headers=headers)
    assert response.status_code == 200
    return response.json()["data"]


async def _create_category(client, headers, schema_id, name="Extra step", display_order=7):
    response = await client.post(
        "/api/schema/categories",
        json={"schemaId": schema_id, "name": name, "description": "More details", "displayOrder": display_order},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_get_default_schema(client, admin_headers, default_schema_id):
    schema = await _schema(client, admin_headers, default_schema_id)
    assert schema["id"] == default_schema_id
    assert schema["isDefault"] is True
    categories = schema["categories"]
    assert len(categories) == 6
    assert [c["displayOrder"] for c in categories] == sorted(c["displayOrder"] for c in categories)
    first = categories[0]["fields"]
    assert [f["fieldName"] for f in first] == ["Title", "Background", "Purpose"]
    assert categories[-1]["fields"] == []


@pytest.mark.asyncio
async def test_get_unknown_schema(client, admin_headers):
    response = await client.get(f"/api/schema/{uuid.uuid4()}", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Schema not found"


@pytest.mark.asyncio
async def test_get_schema_malformed_id(client, admin_headers):
    response = await client.get("/api/schema/not-a-uuid", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_schema_requires_auth(client, default_schema_id):
    response = await client.get(f"/api/schema/{default_schema_id}")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_update_delete_category(client, admin_headers, default_schema_id):
    category = await _create_category(client, admin_headers, default_schema_id)
    assert category["name"] == "Extra step"
    assert category["schemaId"] == default_schema_id

    response = await client.put(
        f"/api/schema/categories/{category['id']}",
        json={"name": "Renamed step", "displayOrder": 8},
        headers=admin_headers,
    )
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["name"] == "Renamed step"
    assert updated["displayOrder"] == 8
    assert updated["description"] == "More details"

    response = await client.delete(f"/api/schema/categories/{category['id']}", headers=admin_headers)
    assert response.status_code == 200
    schema = await _schema(client, admin_headers, default_schema_id)
    assert category["id"] not in [c["id"] for c in schema["categories"]]


@pytest.mark.asyncio
async def test_create_category_unknown_schema(client, admin_headers):
    response = await client.post(
        "/api/schema/categories",
        json={"schemaId": str(uuid.uuid4()), "name": "Orphan", "displayOrder": 1},
        headers=admin_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_missing_category(client, admin_headers):
    response = await client.put(
        f"/api/schema/categories/{uuid.uuid4()}", json={"name": "x"}, headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Category not found"


@pytest.mark.asyncio
async def test_delete_category_removes_fields(client, admin_headers, default_schema_id):
    category = await _create_category(client, admin_headers, default_schema_id)
    response = await client.post(
        "/api/schema/fields",
        json={"categoryId": category["id"], "fieldName": "Notes", "dataType": "TEXTAREA", "displayOrder": 1},
        headers=admin_headers,
    )
    field_id = response.json()["data"]["id"]

    await client.delete(f"/api/schema/categories/{category['id']}", headers=admin_headers)

    response = await client.delete(f"/api/schema/fields/{field_id}", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_radio_field(client, admin_headers, default_schema_id):
    category = await _create_category(client, admin_headers, default_schema_id)
    response = await client.post(
        "/api/schema/fields",
        json={
            "categoryId": category["id"],
            "fieldName": "Contract type",
            "dataType": "RADIO",
            "isRequired": True,
            "options": ["Fixed price", "Time and materials"],
            "displayOrder": 1,
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    field = response.json()["data"]
    assert field["dataType"] == "RADIO"
    assert field["options"] == ["Fixed price", "Time and materials"]
    assert field["isRequired"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("data_type", ["RADIO", "CHECKBOX"])
async def test_choice_field_requires_options(client, admin_headers, default_schema_id, data_type):
    category = await _create_category(client, admin_headers, default_schema_id)
    response = await client.post(
        "/api/schema/fields",
        json={"categoryId": category["id"], "fieldName": "Pick", "dataType": data_type,
              "options": [], "displayOrder": 1},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "Options are required" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_list_field_requires_target(client, admin_headers, default_schema_id):
    category = await _create_category(client, admin_headers, default_schema_id)
    response = await client.post(
        "/api/schema/fields",
        json={"categoryId": category["id"], "fieldName": "Items", "dataType": "LIST",
              "listTargetEntity": "", "displayOrder": 1},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "listTargetEntity is required" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_list_field_rejects_unknown_target(client, admin_headers, default_schema_id):
    category = await _create_category(client, admin_headers, default_schema_id)
    response = await client.post(
        "/api/schema/fields",
        json={"categoryId": category["id"], "fieldName": "Items", "dataType": "LIST",
              "listTargetEntity": "Invoice", "displayOrder": 1},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_create_field_unknown_category(client, admin_headers):
    response = await client.post(
        "/api/schema/fields",
        json={"categoryId": str(uuid.uuid4()), "fieldName": "x", "dataType": "TEXT", "displayOrder": 1},
        headers=admin_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_field_keeps_options_when_omitted(client, admin_headers, default_schema_id):
    schema = await _schema(client, admin_headers, default_schema_id)
    radio = next(f for c in schema["categories"] for f in c["fields"] if f["dataType"] == "RADIO")

    response = await client.put(
        f"/api/schema/fields/{radio['id']}",
        json={"fieldName": "Kind of procurement", "displayOrder": 3},
        headers=admin_headers,
    )
    assert response.status_code == 200
    field = response.json()["data"]
    assert field["fieldName"] == "Kind of procurement"
    assert field["displayOrder"] == 3
    assert field["options"] == radio["options"]


@pytest.mark.asyncio
@pytest.mark.parametrize("options", [[], None])
async def test_update_field_rejects_empty_options(client, admin_headers, default_schema_id, options):
    schema = await _schema(client, admin_headers, default_schema_id)
    checkbox = next(f for c in schema["categories"] for f in c["fields"] if f["dataType"] == "CHECKBOX")

    response = await client.put(
        f"/api/schema/fields/{checkbox['id']}", json={"options": options}, headers=admin_headers
    )
    assert response.status_code == 400
    assert "Options are required" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_update_field_to_list_requires_target(client, admin_headers, default_schema_id):
    schema = await _schema(client, admin_headers, default_schema_id)
    text = next(f for c in schema["categories"] for f in c["fields"] if f["dataType"] == "TEXT")

    response = await client.put(
        f"/api/schema/fields/{text['id']}", json={"dataType": "LIST"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert "listTargetEntity is required" in response.json()["error"]["message"]

    response = await client.put(
        f"/api/schema/fields/{text['id']}",
        json={"dataType": "LIST", "listTargetEntity": "Deliverable"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["listTargetEntity"] == "Deliverable"


@pytest.mark.asyncio
async def test_update_field_to_radio_requires_options(client, admin_headers, default_schema_id):
    schema = await _schema(client, admin_headers, default_schema_id)
    text = next(f for c in schema["categories"] for f in c["fields"] if f["dataType"] == "TEXT")

    response = await client.put(
        f"/api/schema/fields/{text['id']}", json={"dataType": "RADIO"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert "Options are required" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_update_field_type_change_clears_unused_settings(client, admin_headers, default_schema_id):
    schema = await _schema(client, admin_headers, default_schema_id)
    fields = [f for c in schema["categories"] for f in c["fields"]]
    radio = next(f for f in fields if f["dataType"] == "RADIO")
    listing = next(f for f in fields if f["dataType"] == "LIST")
    assert radio["options"] and listing["listTargetEntity"]

    response = await client.put(
        f"/api/schema/fields/{radio['id']}", json={"dataType": "TEXT"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["options"] is None

    response = await client.put(
        f"/api/schema/fields/{listing['id']}", json={"dataType": "TEXT"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["listTargetEntity"] is None

    schema = await _schema(client, admin_headers, default_schema_id)
    updated = {f["id"]: f for c in schema["categories"] for f in c["fields"]}
    assert updated[radio["id"]]["options"] is None
    assert updated[listing["id"]]["listTargetEntity"] is None


@pytest.mark.asyncio
async def test_delete_field(client, admin_headers, default_schema_id):
    schema = await _schema(client, admin_headers, default_schema_id)
    field_id = schema["categories"][0]["fields"][1]["id"]

    response = await client.delete(f"/api/schema/fields/{field_id}", headers=admin_headers)
    assert response.status_code == 200

    schema = await _schema(client, admin_headers, default_schema_id)
    assert field_id not in [f["id"] for f in schema["categories"][0]["fields"]]


@pytest.mark.asyncio
async def test_reset_without_restore_leaves_schema_empty(client, admin_headers, default_schema_id):
    response = await client.post(
        "/api/schema/reset", json={"schemaId": default_schema_id}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["categories"] == []


@pytest.mark.asyncio
async def test_reset_with_restore_defaults(client, admin_headers, default_schema_id):
    await _create_category(client, admin_headers, default_schema_id, name="Custom")

    response = await client.post(
        "/api/schema/reset",
        json={"schemaId": default_schema_id, "restoreDefaults": True},
        headers=admin_headers,
    )
    assert response.status_code == 200
    categories = response.json()["data"]["categories"]
    assert len(categories) == 6
    assert "Custom" not in [c["name"] for c in categories]


@pytest.mark.asyncio
async def test_reset_unknown_schema(client, admin_headers):
    response = await client.post(
        "/api/schema/reset", json={"schemaId": str(uuid.uuid4())}, headers=admin_headers
    )
    assert response.status_code == 404
