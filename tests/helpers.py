"""Small request helpers shared by the API tests."""


def register(client, name):
    return client.post("/participants", json={"name": name})


def post(client, user, to="Todos", text="oi", type="message"):
    return client.post(
        "/messages",
        headers={"User": user},
        json={"to": to, "text": text, "type": type},
    )


def list_messages(client, user, **params):
    return client.get("/messages", headers={"User": user}, params=params)
