"""
API tests for the /forums/posts endpoints
"""
import pytest

from conftest import ADMIN_ID, AUTHOR_ID, CATEGORY_ID, OTHER_MEMBER_ID, REPORT_THRESHOLD

BASE = "/forums/posts"


@pytest.fixture
def created_post(client):
    response = client.post(
        f"{BASE}/",
        json={
            "member_id": AUTHOR_ID,
            "category_id": CATEGORY_ID,
            "title": "T",
            "content": "C",
            "file_urls": ["https://cdn.example.com/a.png"],
        },
    )
    assert response.status_code == 201
    return response.json()


class TestCreateAndRead:
    def test_create_post(self, created_post):
        assert created_post["title"] == "T"
        assert created_post["author_id"] == AUTHOR_ID
        assert created_post["author_name"] == "Author"
        assert created_post["state"] == "active"
        assert created_post["hidden"] is False
        assert created_post["file_url"] == "https://cdn.example.com/a.png"

    def test_missing_title_is_a_validation_error(self, client):
        response = client.post(
            f"{BASE}/",
            json={"member_id": AUTHOR_ID, "category_id": CATEGORY_ID, "content": "C"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Title is required.", "type": "validation_error"}

    def test_get_post_details(self, client, created_post):
        response = client.get(f"{BASE}/{created_post['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == created_post["id"]

    def test_unknown_post(self, client):
        response = client.get(f"{BASE}/404")
        assert response.status_code == 404
        assert response.json()["type"] == "not_found"

    def test_list_by_category(self, client, created_post):
        response = client.get(
            f"{BASE}/", params={"category_id": CATEGORY_ID, "page": 1, "size": 10}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["page"] == 1
        assert [p["id"] for p in body["posts"]] == [created_post["id"]]

    def test_increment_view(self, client, created_post):
        for _ in range(3):
            response = client.post(f"{BASE}/{created_post['id']}/increment-view")
            assert response.status_code == 200
        assert client.get(f"{BASE}/{created_post['id']}").json()["views_count"] == 3


class TestPermissions:
    def test_permission_checks_for_author_and_stranger(self, client, created_post):
        post_id = created_post["id"]
        author = {"logged_in_member_id": AUTHOR_ID}
        stranger = {"logged_in_member_id": OTHER_MEMBER_ID}

        assert client.get(f"{BASE}/{post_id}/can-edit", params=author).json() is True
        assert client.get(f"{BASE}/{post_id}/can-delete", params=author).json() is True
        assert client.get(f"{BASE}/{post_id}/can-edit", params=stranger).json() is False
        assert client.get(f"{BASE}/{post_id}/can-delete", params=stranger).json() is False

    def test_admin_edit_locks_post_for_author(self, client, created_post):
        post_id = created_post["id"]
        response = client.put(
            f"{BASE}/{post_id}/title",
            params={"logged_in_member_id": ADMIN_ID},
            json={"title": "New"},
        )
        assert response.status_code == 200
        assert response.json()["locked"] is True
        assert response.json()["edited_by_title"] == "ADMIN"

        check = client.get(
            f"{BASE}/{post_id}/can-edit", params={"logged_in_member_id": AUTHOR_ID}
        )
        assert check.json() is False

        response = client.put(
            f"{BASE}/{post_id}/title",
            params={"logged_in_member_id": AUTHOR_ID},
            json={"title": "Mine"},
        )
        assert response.status_code == 403
        assert response.json()["type"] == "unauthorized"

    def test_author_edits_content(self, client, created_post):
        response = client.put(
            f"{BASE}/{created_post['id']}/content",
            params={"logged_in_member_id": AUTHOR_ID},
            json={"content": "Edited"},
        )
        assert response.status_code == 200
        assert response.json()["content"] == "Edited"
        assert response.json()["locked"] is False

    def test_stranger_delete_is_forbidden(self, client, created_post):
        response = client.delete(
            f"{BASE}/{created_post['id']}",
            params={"logged_in_member_id": OTHER_MEMBER_ID},
        )
        assert response.status_code == 403
        assert client.get(f"{BASE}/{created_post['id']}").json()["state"] == "active"

    def test_unknown_member_is_rejected(self, client, created_post):
        response = client.get(
            f"{BASE}/{created_post['id']}/can-edit", params={"logged_in_member_id": 999}
        )
        assert response.status_code == 401


class TestModeration:
    def test_reports_hide_post_at_threshold(self, client, created_post):
        post_id = created_post["id"]
        for i in range(1, REPORT_THRESHOLD + 1):
            response = client.post(
                f"{BASE}/{post_id}/report",
                params={"logged_in_member_id": OTHER_MEMBER_ID},
                json={"reason": "spam"},
            )
            assert response.status_code == 200
            body = response.json()
            assert body["report_count"] == i
            assert body["hidden"] is (i >= REPORT_THRESHOLD)

        # hidden posts are not served to readers, but admins still see them
        assert client.get(f"{BASE}/{post_id}").status_code == 404
        admin_view = client.get(f"{BASE}/{post_id}", params={"logged_in_member_id": ADMIN_ID})
        assert admin_view.status_code == 200

        reports = client.get(
            f"{BASE}/{post_id}/reports", params={"logged_in_member_id": ADMIN_ID}
        )
        assert len(reports.json()["reports"]) == REPORT_THRESHOLD

    def test_hide_and_restore_require_admin(self, client, created_post):
        post_id = created_post["id"]
        response = client.post(
            f"{BASE}/{post_id}/hide", params={"logged_in_member_id": AUTHOR_ID}
        )
        assert response.status_code == 403

        response = client.post(
            f"{BASE}/{post_id}/hide", params={"logged_in_member_id": ADMIN_ID}
        )
        assert response.json()["hidden"] is True

        response = client.post(
            f"{BASE}/{post_id}/restore", params={"logged_in_member_id": ADMIN_ID}
        )
        assert response.json()["hidden"] is False

    def test_restore_active_post_is_conflict(self, client, created_post):
        response = client.post(
            f"{BASE}/{created_post['id']}/restore",
            params={"logged_in_member_id": ADMIN_ID},
        )
        assert response.status_code == 409
        assert response.json()["type"] == "terminal_state_conflict"

    def test_deleted_post_is_terminal(self, client, created_post):
        post_id = created_post["id"]
        response = client.delete(
            f"{BASE}/{post_id}", params={"logged_in_member_id": ADMIN_ID}
        )
        assert response.status_code == 200
        assert response.json()["removed_by"] == "ADMIN"

        response = client.post(
            f"{BASE}/{post_id}/report",
            params={"logged_in_member_id": OTHER_MEMBER_ID},
            json={"reason": "spam"},
        )
        assert response.status_code == 409
        assert response.json()["type"] == "terminal_state_conflict"

    def test_quote_and_sticky(self, client, created_post):
        post_id = created_post["id"]
        quote = client.post(
            f"{BASE}/{post_id}/quote",
            params={"logged_in_member_id": OTHER_MEMBER_ID},
            json={"comment_content": "Agreed"},
        )
        assert quote.status_code == 201
        assert quote.json()["quoted_post_id"] == post_id

        pinned = client.put(
            f"{BASE}/{post_id}/sticky",
            params={"logged_in_member_id": ADMIN_ID},
            json={"sticky": True},
        )
        assert pinned.status_code == 200
        assert pinned.json()["sticky"] is True

        listing = client.get(f"{BASE}/", params={"category_id": CATEGORY_ID})
        assert listing.json()["posts"][0]["id"] == post_id
