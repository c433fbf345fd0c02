import pytest


async def _create(client, varname, obj_type, position):
    response = await client.post("/objects", json={"obj_type": obj_type, "position": position, "varname": varname})
    assert response.status_code == 200
    return response


@pytest.mark.asyncio
async def test_root_returns_status_ok(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_console_is_empty_in_standalone_mode(client):
    for path in ("/console", "/console?level=error", "/console?since_last_call=true"):
        response = await client.get(path)
        assert response.status_code == 200
        assert response.json() == {"messages": [], "overflow": False}


@pytest.mark.asyncio
async def test_console_surfaces_host_messages(client, standalone_facade):
    standalone_facade.inbound.dispatch("console_msg", "dac~:", "error", "no", "audio", "device")
    standalone_facade.inbound.dispatch("console_msg", "loaded", "patch")

    response = await client.get("/console", params={"level": "error"})
    body = response.json()
    assert [entry["message"] for entry in body["messages"]] == ["dac~: error no audio device"]
    assert body["messages"][0]["level"] == "error"


@pytest.mark.asyncio
async def test_list_objects_starts_empty(client):
    response = await client.get("/objects")
    assert response.status_code == 200
    assert response.json() == {"results": {"boxes": [], "lines": []}}


@pytest.mark.asyncio
async def test_create_object_then_list_returns_it(client):
    response = await _create(client, "t1", "toggle", [100, 200])
    assert response.json() == {"ok": True}

    body = (await client.get("/objects")).json()
    assert body["results"]["boxes"] == [
        {"box": {"maxclass": "toggle", "varname": "t1", "patching_rect": [100, 200, 180, 222]}}
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"obj_type": "toggle"},
        {"obj_type": "toggle", "varname": "t1"},
        {"position": [0, 0], "varname": "t1"},
        {"obj_type": "", "position": [0, 0], "varname": "t1"},
        {},
    ],
)
async def test_create_object_rejects_missing_fields(client, payload):
    response = await client.post("/objects", json=payload)
    assert response.status_code == 400
    assert "missing" in response.json()["error"]

    assert (await client.get("/objects")).json()["results"]["boxes"] == []


@pytest.mark.asyncio
async def test_create_object_rejects_malformed_position(client):
    response = await client.post("/objects", json={"obj_type": "toggle", "position": [1], "varname": "t1"})
    assert response.status_code == 400
    assert (await client.get("/objects")).json()["results"]["boxes"] == []


@pytest.mark.asyncio
async def test_create_object_rejects_duplicate_varname(client):
    await _create(client, "t1", "toggle", [0, 0])
    response = await client.post("/objects", json={"obj_type": "button", "position": [5, 5], "varname": "t1"})
    assert response.status_code == 409

    boxes = (await client.get("/objects")).json()["results"]["boxes"]
    assert [box["box"]["maxclass"] for box in boxes] == ["toggle"]


@pytest.mark.asyncio
async def test_delete_object(client):
    await _create(client, "b1", "button", [0, 0])

    response = await client.delete("/objects/b1")
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    assert (await client.get("/objects")).json()["results"]["boxes"] == []


@pytest.mark.asyncio
async def test_delete_object_removes_attached_connections(client):
    await _create(client, "a", "button", [0, 0])
    await _create(client, "b", "toggle", [0, 50])
    await _create(client, "c", "toggle", [0, 100])
    await client.post("/connections", json={"src_varname": "a", "dst_varname": "b"})
    await client.post("/connections", json={"src_varname": "b", "dst_varname": "c"})
    await client.post("/connections", json={"src_varname": "a", "dst_varname": "c", "inlet_idx": 1})

    await client.delete("/objects/b")

    lines = (await client.get("/objects")).json()["results"]["lines"]
    assert lines == [{"patchline": {"source": ["a", 0], "destination": ["c", 1]}}]


@pytest.mark.asyncio
async def test_create_and_remove_connection(client):
    payload = {"src_varname": "a", "dst_varname": "b", "outlet_idx": 0, "inlet_idx": 0}
    response = await client.post("/connections", json=payload)
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    lines = (await client.get("/objects")).json()["results"]["lines"]
    assert lines == [{"patchline": {"source": ["a", 0], "destination": ["b", 0]}}]

    response = await client.request("DELETE", "/connections", json=payload)
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert (await client.get("/objects")).json()["results"]["lines"] == []


@pytest.mark.asyncio
async def test_connection_ports_default_to_zero(client):
    await client.post("/connections", json={"src_varname": "a", "dst_varname": "b"})
    await client.request("DELETE", "/connections", json={"src_varname": "a", "dst_varname": "b"})
    assert (await client.get("/objects")).json()["results"]["lines"] == []


@pytest.mark.asyncio
async def test_duplicate_connection_is_stored_once(client):
    payload = {"src_varname": "a", "dst_varname": "b"}
    await client.post("/connections", json=payload)
    await client.post("/connections", json=payload)
    assert len((await client.get("/objects")).json()["results"]["lines"]) == 1


@pytest.mark.asyncio
async def test_disconnect_requires_exact_match(client):
    await client.post("/connections", json={"src_varname": "a", "dst_varname": "b", "outlet_idx": 1})
    response = await client.request("DELETE", "/connections", json={"src_varname": "a", "dst_varname": "b"})
    assert response.status_code == 200
    assert len((await client.get("/objects")).json()["results"]["lines"]) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "DELETE"])
async def test_connection_endpoints_reject_missing_fields(client, method):
    for payload in ({"src_varname": "a"}, {"dst_varname": "b"}, {}):
        response = await client.request(method, "/connections", json=payload)
        assert response.status_code == 400
    assert (await client.get("/objects")).json()["results"]["lines"] == []


@pytest.mark.asyncio
async def test_attributes_of_existing_object(client):
    await _create(client, "s1", "slider", [10, 20])

    response = await client.get("/objects/s1/attributes")
    assert response.status_code == 200
    assert response.json()["results"] == {"maxclass": "slider", "patching_rect": [10, 20, 90, 42], "varname": "s1"}


@pytest.mark.asyncio
async def test_attributes_of_missing_object_is_null(client):
    response = await client.get("/objects/nope/attributes")
    assert response.status_code == 200
    assert response.json() == {"results": None}


@pytest.mark.asyncio
async def test_selection_is_empty_without_host(client):
    await _create(client, "t1", "toggle", [0, 0])
    response = await client.get("/objects/selected")
    assert response.json() == {"results": {"boxes": [], "lines": []}}


@pytest.mark.asyncio
async def test_bounds_of_empty_patcher(client):
    response = await client.get("/objects/bounds")
    assert response.status_code == 200
    assert response.json()["results"] == [0, 0, 0, 0]


@pytest.mark.asyncio
async def test_bounds_cover_all_objects(client):
    await _create(client, "x1", "toggle", [50, 100])
    await _create(client, "x2", "button", [200, 300])

    response = await client.get("/objects/bounds")
    assert response.json()["results"] == [50, 100, 280, 322]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path, payload",
    [
        ("PATCH", "/objects/obj1/attributes", {"attr_name": "bgcolor", "attr_value": [1, 0, 0, 1]}),
        ("PATCH", "/objects/msg1/text", {"new_text": "hello world"}),
        ("POST", "/objects/obj1/message", {"message": "bang"}),
        ("POST", "/objects/obj1/bang", None),
        ("PATCH", "/objects/num1/number", {"num": 42}),
        ("PATCH", "/objects/num1/number", {"num": 0}),
    ],
)
async def test_box_edits_acknowledge(client, method, path, payload):
    response = await client.request(method, path, json=payload)
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path, payload",
    [
        ("PATCH", "/objects/obj1/attributes", {"attr_name": "bgcolor"}),
        ("PATCH", "/objects/obj1/attributes", {"attr_value": 1}),
        ("PATCH", "/objects/msg1/text", {}),
        ("POST", "/objects/obj1/message", {}),
        ("PATCH", "/objects/num1/number", {}),
        ("PATCH", "/objects/num1/number", {"num": None}),
    ],
)
async def test_box_edits_reject_missing_fields(client, method, path, payload):
    response = await client.request(method, path, json=payload)
    assert response.status_code == 400
    assert response.json()["code"] == "missing_fields"
