import pytest

from conftest import TINY_IMAGE


def test_creator_is_rsvpd_on_creation(signup, create_event, db):
    member, user = signup()
    event = create_event(
        member,
        title=" Beach cleanup ",
        location="Ocean Beach",
        latitude=37.76,
        longitude=-122.51,
        description="Bring gloves",
        rsvpLink="https://example.com/rsvp",
        images=[TINY_IMAGE],
    )

    assert event["type"] == "event"
    assert event["title"] == "Beach cleanup"
    assert event["latitude"] == pytest.approx(37.76)
    assert event["creatorId"] == user["id"]
    assert event["rsvpCount"] == 1
    assert event["rsvpdByCurrentUser"] is True
    assert event["eventTime"].startswith("2030-05-01T09:00:00")
    assert len(db("SELECT * FROM event_rsvps WHERE event_id = ?", (event["id"],))) == 1


def test_anonymous_viewer_flags_are_false(signup, create_event, client):
    member, _ = signup()
    event = create_event(member)
    member.post(f"/events/{event['id']}/likes")

    anonymous = client.get(f"/events/{event['id']}").json()["event"]
    assert anonymous["likesCount"] == 1
    assert anonymous["likedByCurrentUser"] is False
    assert anonymous["rsvpdByCurrentUser"] is False


@pytest.mark.parametrize("payload, message", [
    ({"eventTime": "2030-05-01T09:00:00Z"}, "Title is required"),
    ({"title": "Picnic"}, "Valid eventTime is required"),
    ({"title": "Picnic", "eventTime": "next tuesday"}, "Valid eventTime is required"),
    ({"title": "Picnic", "eventTime": "2030-05-01T09:00:00Z", "latitude": 91}, "Latitude must be between -90 and 90."),
    ({"title": "Picnic", "eventTime": "2030-05-01T09:00:00Z", "longitude": -181}, "Longitude must be between -180 and 180."),
    ({"title": "Picnic", "eventTime": "2030-05-01T09:00:00Z", "groupId": 4242}, "Selected group does not exist."),
])
def test_event_validation(signup, payload, message):
    member, _ = signup()
    response = member.post("/events", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_image_limit_names_events(signup):
    member, _ = signup()
    response = member.post("/events", json={
        "title": "Picnic", "eventTime": "2030-05-01T09:00:00Z", "images": [TINY_IMAGE] * 5
    })
    assert response.json() == {"error": "You can upload up to 4 images per event."}


def test_event_in_group_reports_group_name(signup, create_group, create_event):
    member, _ = signup()
    group = create_group(member, name="Tide Watchers")
    event = create_event(member, groupId=group["id"])
    assert event["groupId"] == group["id"]
    assert event["groupName"] == "Tide Watchers"


def test_rsvp_is_idempotent(signup, create_event, db):
    host, _ = signup()
    guest, _ = signup()
    event = create_event(host)

    guest.post(f"/events/{event['id']}/rsvps")
    response = guest.post(f"/events/{event['id']}/rsvps")
    assert response.json()["event"]["rsvpCount"] == 2
    assert response.json()["event"]["rsvpdByCurrentUser"] is True
    assert len(db("SELECT * FROM event_rsvps WHERE event_id = ?", (event["id"],))) == 2

    cancelled = guest.delete(f"/events/{event['id']}/rsvps").json()["event"]
    assert cancelled["rsvpCount"] == 1
    assert cancelled["rsvpdByCurrentUser"] is False


def test_event_likes_are_idempotent(signup, create_event):
    member, _ = signup()
    event = create_event(member)
    member.post(f"/events/{event['id']}/likes")
    liked = member.post(f"/events/{event['id']}/likes").json()["event"]
    assert liked["likesCount"] == 1
    assert member.delete(f"/events/{event['id']}/likes").json()["event"]["likesCount"] == 0


def test_only_creator_can_edit_or_delete(signup, create_event):
    host, _ = signup()
    stranger, _ = signup()
    event = create_event(host)

    response = stranger.patch(f"/events/{event['id']}", json={"title": "Mine now"})
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: You can only edit your own events"}
    assert stranger.delete(f"/events/{event['id']}").status_code == 403

    edited = host.patch(f"/events/{event['id']}", json={"title": "Dune restoration", "latitude": 10}).json()["event"]
    assert edited["title"] == "Dune restoration"
    assert edited["latitude"] == 10
    assert edited["rsvpCount"] == 1

    assert host.delete(f"/events/{event['id']}").json() == {"message": "Event deleted successfully"}
    assert host.get(f"/events/{event['id']}").json() == {"error": "Event not found"}


def test_patch_can_clear_group(signup, create_group, create_event):
    member, _ = signup()
    group = create_group(member)
    event = create_event(member, groupId=group["id"])
    edited = member.patch(f"/events/{event['id']}", json={"groupId": None}).json()["event"]
    assert edited["groupId"] is None
    assert edited["groupName"] is None


def test_delete_event_cascades(signup, create_event, db):
    member, _ = signup()
    event = create_event(member)
    member.post(f"/events/{event['id']}/likes")
    member.post(f"/events/{event['id']}/replies", json={"body": "See you there"})

    member.delete(f"/events/{event['id']}")

    for table in ("event_likes", "event_rsvps", "event_replies"):
        assert db(f"SELECT * FROM {table} WHERE event_id = ?", (event["id"],)) == []


def test_event_replies(signup, create_event):
    host, _ = signup()
    guest, guest_user = signup(name="Grace Hopper")
    event = create_event(host)

    created = guest.post(f"/events/{event['id']}/replies", json={"body": " Count me in "})
    assert created.status_code == 201
    assert created.json()["reply"]["body"] == "Count me in"
    assert created.json()["reply"]["authorName"] == "Grace Hopper"
    assert created.json()["event"]["repliesCount"] == 1

    listed = host.get(f"/events/{event['id']}/replies").json()
    assert [r["authorId"] for r in listed["replies"]] == [guest_user["id"]]


def test_reply_to_missing_event_is_404(signup):
    member, _ = signup()
    response = member.post("/events/777/replies", json={"body": "hello"})
    assert response.status_code == 404


def test_list_and_detail_agree(signup, create_event, client):
    host, _ = signup()
    guest, _ = signup()
    event = create_event(host)
    guest.post(f"/events/{event['id']}/likes")
    guest.post(f"/events/{event['id']}/rsvps")
    guest.post(f"/events/{event['id']}/replies", json={"body": "On my way"})

    for viewer in (host, guest, client):
        listed = [e for e in viewer.get("/events").json()["events"] if e["id"] == event["id"]][0]
        detail = viewer.get(f"/events/{event['id']}").json()["event"]
        assert listed == detail

    detail = guest.get(f"/events/{event['id']}").json()["event"]
    assert detail["likesCount"] == 1
    assert detail["repliesCount"] == 1
    assert detail["rsvpCount"] == 2
    assert detail["likedByCurrentUser"] is True
    assert detail["rsvpdByCurrentUser"] is True
