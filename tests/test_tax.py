import pytest


@pytest.mark.parametrize(
    "state, rate, tax, total",
    [
        ("FL", 0.07, 7.0, 107.0),
        ("ca", 0.085, 8.5, 108.5),
        ("NY", 0.08, 8.0, 108.0),
        ("TX", 0.0625, 6.25, 106.25),
        ("WA", 0.07, 7.0, 107.0),
    ],
)
def test_tax_by_state(client, state, rate, tax, total):
    r = client.post("/api/calculate-tax", json={"subtotal": 100, "state": state})
    assert r.status_code == 200
    assert r.json() == {
        "subtotal": 100.0,
        "taxAmount": tax,
        "total": total,
        "taxRate": rate,
        "state": state.upper(),
    }


def test_tax_defaults_to_florida_and_rounds_half_up(client):
    r = client.post("/api/calculate-tax", json={"subtotal": 10.5, "zipCode": "33101"})
    body = r.json()
    assert body["state"] == "FL"
    # 10.5 * 0.07 = 0.735
    assert body["taxAmount"] == 0.74
    assert body["total"] == 11.24


@pytest.mark.parametrize("subtotal", [0, -5, "100", None, True])
def test_tax_rejects_bad_subtotal(client, subtotal):
    r = client.post("/api/calculate-tax", json={"subtotal": subtotal})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid subtotal. Must be a positive number."}


@pytest.mark.parametrize("raw", ["Infinity", "NaN"])
def test_tax_rejects_non_finite_subtotal(client, raw):
    r = client.post(
        "/api/calculate-tax",
        content='{"subtotal": %s}' % raw,
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid subtotal. Must be a positive number."}
