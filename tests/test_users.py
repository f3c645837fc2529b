def test_public_profile_hides_email(signup, client):
    _, user = signup(name="Rachel Carson")
    payload = client.get(f"/users/{user['id']}").json()
    assert payload["user"]["handle"] == "rachelcarson"
    assert "email" not in payload["user"]
    assert payload["events"] == []
    assert payload["groups"] == []
    assert payload["memberGroups"] == []


def test_public_profile_lists_activity(signup, create_event, create_group, client):
    organiser, organiser_user = signup()
    volunteer, volunteer_user = signup()
    own_group = create_group(organiser, name="Seed Library")
    other_group = create_group(volunteer, name="Compost Club")
    event = create_event(organiser, groupId=own_group["id"])
    organiser.post(f"/groups/{other_group['id']}/members")

    payload = client.get(f"/users/{organiser_user['id']}").json()

    assert [e["id"] for e in payload["events"]] == [event["id"]]
    assert payload["events"][0]["rsvpdByCurrentUser"] is False
    assert [g["id"] for g in payload["groups"]] == [own_group["id"]]
    assert [g["id"] for g in payload["memberGroups"]] == [other_group["id"]]

    volunteer_view = client.get(f"/users/{volunteer_user['id']}").json()
    assert volunteer_view["memberGroups"] == []


def test_unknown_user_is_404(client):
    response = client.get("/users/404")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}
