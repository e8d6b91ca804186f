def test_register_logs_the_user_in(client, db):
    response = client.post("/users", json={
        "name": "Jane",
        "email": "Jane@Mail.com",
        "password": "secret1",
    })

    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/auth", headers={"x-auth-token": token})
    assert me.status_code == 200
    assert me.json()["email"] == "jane@mail.com"
    assert me.json()["avatar"].startswith("https://www.gravatar.com/avatar/")


def test_register_stores_a_hash_not_the_password(client, db):
    client.post("/users", json={"name": "Jane", "email": "jane@mail.com", "password": "secret1"})

    stored = db.get_user_by_email("jane@mail.com")
    assert stored["password"] != "secret1"
    assert stored["password"].startswith("$2")


def test_registered_user_can_log_in(client):
    client.post("/users", json={"name": "Jane", "email": "jane@mail.com", "password": "secret1"})

    response = client.post("/auth", json={"email": "jane@mail.com", "password": "secret1"})

    assert response.status_code == 200


def test_register_rejects_existing_email(client, db):
    db.add_user("Jane", "jane@mail.com", "secret1")

    response = client.post("/users", json={"name": "Other", "email": "jane@mail.com", "password": "secret2"})

    assert response.status_code == 400
    assert response.json() == {"errors": [{"msg": "User already exists"}]}
    assert len(db.users) == 1


def test_register_validates_every_field(client, db):
    response = client.post("/users", json={"name": " ", "email": "nope", "password": "123"})

    assert response.status_code == 400
    params = {error["param"] for error in response.json()["errors"]}
    assert params == {"name", "email", "password"}
    assert db.users == {}


def test_register_rejects_password_longer_than_bcrypt_accepts(client, db):
    response = client.post("/users", json={"name": "Jane", "email": "jane@mail.com", "password": "x" * 80})

    assert response.status_code == 400
    assert response.json() == {"errors": [{
        "msg": "Please enter a password with 6 to 72 characters",
        "param": "password",
        "location": "body",
    }]}
    assert db.users == {}


def test_register_accepts_72_byte_password(client):
    response = client.post("/users", json={"name": "Jane", "email": "jane@mail.com", "password": "x" * 72})

    assert response.status_code == 200
