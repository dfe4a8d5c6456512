def test_routes_endpoint_lists_routes(offline_client):
    r = offline_client.get("/__routes")
    assert r.status_code == 200
    assert isinstance(r.json(), list)
    paths = {item["path"] for item in r.json()}
    assert "/" in paths


def test_openapi_contains_expected_prefixes(offline_client):
    r = offline_client.get("/openapi.json")
    assert r.status_code == 200
    all_paths = set(r.json().get("paths", {}).keys())

    expected_prefixes = ["/vehicles", "/inspectors", "/inspections", "/inspection-items", "/reports"]
    missing = [
        prefix
        for prefix in expected_prefixes
        if not any(p == prefix or p.startswith(prefix + "/") for p in all_paths)
    ]
    assert not missing, f"Missing route prefixes: {missing}"


def test_item_suggestions_are_served(offline_client):
    r = offline_client.get("/inspection-items/suggestions")
    assert r.status_code == 200
    names = r.json()["items"]
    assert "Brakes" in names
    assert "Registration/Documentation" in names
