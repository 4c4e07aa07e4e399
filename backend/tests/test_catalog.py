from app.models.catalog import LiquorBase
from app.models.preference import UserPreference
from app.services.catalog_loader import get_liquor_bases, load_liquor_bases


def test_load_liquor_bases_upserts(db, tmp_path):
    catalog_file = tmp_path / "bases.yaml"
    catalog_file.write_text(
        "bases:\n"
        "  - code: RON\n"
        "    label: Ron\n"
        "  - code: GIN\n"
        "    label: Gin\n"
        "  - label: No code\n"
    )

    loaded = load_liquor_bases(db, catalog_file)
    assert [base.code for base in loaded] == ["RON", "GIN"]

    catalog_file.write_text("bases:\n  - code: RON\n    label: Ron añejo\n")
    load_liquor_bases(db, catalog_file)

    assert db.query(LiquorBase).count() == 2
    assert db.get(LiquorBase, "RON").label == "Ron añejo"


def test_load_liquor_bases_missing_file(db, tmp_path):
    assert load_liquor_bases(db, tmp_path / "missing.yaml") == []


def test_bundled_catalog_covers_register_codes(db):
    load_liquor_bases(db)

    codes = {base.code for base in get_liquor_bases(db)}
    assert codes == {"RON", "TEQUILA", "WHISKY", "GIN", "VODKA", "BRANDY", "NA"}


def test_catalog_route_lists_bases_by_label(client, session_factory):
    db = session_factory()
    try:
        db.add_all([LiquorBase(code="VODKA", label="Vodka"), LiquorBase(code="GIN", label="Gin")])
        db.commit()
    finally:
        db.close()

    response = client.get("/catalog/bases")
    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "items": [{"code": "GIN", "label": "Gin"}, {"code": "VODKA", "label": "Vodka"}],
    }


def test_save_preferences(client, session_factory):
    response = client.post("/preferences", json={"nombre": "Ana", "sabor": "dulce", "con_alcohol": True})
    assert response.status_code == 201
    body = response.json()
    assert body["ok"] is True
    assert body["data"]["sabor"] == "dulce"

    db = session_factory()
    try:
        assert db.query(UserPreference).count() == 1
    finally:
        db.close()


def test_save_preferences_requires_fields(client):
    response = client.post("/preferences", json={"nombre": "Ana"})
    assert response.status_code == 400
    assert response.json()["ok"] is False
