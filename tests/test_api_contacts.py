import pytest


def create(client, **fields):
    return client.post("/contacts.json", json={"contact": fields})


class TestCreate:
    def test_assigns_increasing_ids(self, client):
        first = create(client, name="Amy", email="amy@example.com")
        second = create(client, name="Bo")

        assert first.status_code == 201
        assert first.json()["id"] == 1
        assert first.json()["email"] == "amy@example.com"
        assert second.json()["id"] == 2
        assert "created_at" in second.json()

    def test_blank_contact(self, client):
        response = create(client)
        assert response.status_code == 201
        assert response.json()["name"] is None

    @pytest.mark.parametrize("email", ["", "   ", None, "a.b+c@sub.example.org", "x@localhost"])
    def test_accepts_blank_or_well_formed_email(self, client, email):
        assert create(client, email=email).status_code == 201

    @pytest.mark.parametrize("email", ["not-an-email", "a@", "@example.com", "a@-bad.com", "a b@example.com"])
    def test_rejects_malformed_email(self, client, repo, email):
        response = create(client, email=email)
        assert response.status_code == 422
        assert repo.all() == []

    def test_requires_contact_envelope(self, client):
        assert client.post("/contacts.json", json={"name": "Amy"}).status_code == 422


class TestReadUpdateDelete:
    def test_list_in_insertion_order(self, client):
        create(client, name="Amy")
        create(client, name="Bo")
        response = client.get("/contacts.json")
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Amy", "Bo"]

    def test_show(self, client):
        create(client, name="Amy")
        assert client.get("/contacts/1.json").json()["name"] == "Amy"

    def test_update_changes_only_given_fields(self, client):
        create(client, name="Amy", phone="555-0100")
        response = client.put("/contacts/1.json", json={"contact": {"twitter": "@amy"}})

        assert response.status_code == 200
        body = response.json()
        assert body["twitter"] == "@amy"
        assert body["name"] == "Amy"
        assert body["phone"] == "555-0100"

    def test_patch_is_accepted(self, client):
        create(client, name="Amy")
        assert client.patch("/contacts/1.json", json={"contact": {"name": "Amelia"}}).json()["name"] == "Amelia"

    def test_update_validates_email(self, client):
        create(client, name="Amy")
        response = client.put("/contacts/1.json", json={"contact": {"email": "nope"}})
        assert response.status_code == 422

    def test_delete(self, client, repo):
        create(client, name="Amy")
        response = client.delete("/contacts/1.json")
        assert response.status_code == 204
        assert response.content == b""
        assert repo.all() == []

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_unknown_id(self, client, method):
        response = getattr(client, method)("/contacts/42.json")
        assert response.status_code == 404
        assert response.json() == {"detail": "Contact not found"}

    def test_update_unknown_id(self, client):
        response = client.put("/contacts/42.json", json={"contact": {"name": "X"}})
        assert response.status_code == 404


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["name"] == "Contactbook"
