from datetime import timedelta

from travel_blog.api.deps import get_like_ledger
from travel_blog.exceptions import TransientStoreFailure


class TestAuthentication:
    """Status codes for missing, malformed and rejected tokens"""

    def test_missing_token_is_401(self, client):
        response = client.get("/api/likes")

        assert response.status_code == 401
        assert response.json()["message"]
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_wrong_scheme_is_401(self, client):
        response = client.get("/api/likes", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401

    def test_invalid_token_is_403(self, client):
        response = client.get("/api/likes", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 403
        assert response.json()["error"] == "invalid_token"

    def test_expired_token_is_403(self, client, identity):
        token = identity.issue_token("user-1", expires_delta=timedelta(minutes=-5))

        response = client.delete("/api/likes/art1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_articles_are_public(self, client):
        assert client.get("/api/articles").status_code == 200


class TestLikesApi:

    def test_empty_ledger(self, client, auth_headers):
        response = client.get("/api/likes", headers=auth_headers())

        assert response.status_code == 200
        assert response.json() == {"likedArticleIds": []}

    def test_like_unlike_round_trip(self, client, auth_headers):
        headers = auth_headers("user-1")

        response = client.post("/api/likes", json={"articleId": "art1"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["likesCount"] == 6

        response = client.post("/api/likes", json={"articleId": "art1"}, headers=headers)
        assert response.json()["likesCount"] == 6

        response = client.get("/api/likes", headers=headers)
        assert response.json() == {"likedArticleIds": ["art1"]}

        response = client.delete("/api/likes/art1", headers=headers)
        assert response.status_code == 200
        assert response.json()["likesCount"] == 5

        response = client.delete("/api/likes/art1", headers=headers)
        assert response.status_code == 200
        assert response.json()["likesCount"] == 5

    def test_likes_are_per_user(self, client, auth_headers):
        client.post("/api/likes", json={"articleId": "art1"}, headers=auth_headers("user-1"))

        response = client.get("/api/likes", headers=auth_headers("user-2"))

        assert response.json() == {"likedArticleIds": []}

    def test_missing_article_id_is_400(self, client, auth_headers):
        response = client.post("/api/likes", json={}, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["message"] == "articleId is required"

    def test_malformed_body_is_400(self, client, auth_headers):
        response = client.post(
            "/api/likes",
            content="not json",
            headers={**auth_headers(), "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_like_unknown_article_is_404(self, client, auth_headers):
        response = client.post("/api/likes", json={"articleId": "nope"}, headers=auth_headers())

        assert response.status_code == 404
        assert response.json()["message"] == "Article 'nope' not found"

        response = client.get("/api/likes", headers=auth_headers())
        assert response.json() == {"likedArticleIds": []}

    def test_unlike_unknown_article_is_not_an_error(self, client, auth_headers):
        response = client.delete("/api/likes/nope", headers=auth_headers())

        assert response.status_code == 200
        assert response.json()["likesCount"] == 0

    def test_transaction_failure_is_500(self, app, client, auth_headers):
        class ConflictingLedger:
            async def like(self, user_id, article_id):
                raise TransientStoreFailure()

        app.dependency_overrides[get_like_ledger] = lambda: ConflictingLedger()
        try:
            response = client.post("/api/likes", json={"articleId": "art1"}, headers=auth_headers())
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {
            "message": "The request could not be completed, please try again",
            "error": "transaction_failed",
        }

    def test_counter_visible_in_catalog(self, client, auth_headers):
        client.post("/api/likes", json={"articleId": "art2"}, headers=auth_headers("user-1"))
        client.post("/api/likes", json={"articleId": "art2"}, headers=auth_headers("user-2"))

        response = client.get("/api/articles/art2")

        assert response.json()["likesCount"] == 2


class TestCommentsApi:

    def test_add_comment(self, client, auth_headers):
        response = client.post(
            "/api/comments/art1",
            json={"name": "  Olena ", "text": " What a view! "},
            headers=auth_headers("user-7", email="olena@example.com"),
        )

        assert response.status_code == 201
        comment = response.json()["comment"]
        assert comment["displayName"] == "Olena"
        assert comment["text"] == "What a view!"
        assert comment["userId"] == "user-7"
        assert comment["userEmail"] == "olena@example.com"
        assert "createdAt" in comment

    def test_anonymous_display_name(self, client, auth_headers):
        response = client.post("/api/comments/art1", json={"text": "Hi"}, headers=auth_headers())

        assert response.json()["comment"]["displayName"] == "Anonymous"

    def test_empty_text_is_400(self, client, auth_headers):
        response = client.post("/api/comments/art1", json={"text": "   "}, headers=auth_headers())

        assert response.status_code == 400

    def test_unknown_article_is_404(self, client, auth_headers):
        response = client.post("/api/comments/nope", json={"text": "Hi"}, headers=auth_headers())

        assert response.status_code == 404

    def test_comment_requires_token(self, client):
        response = client.post("/api/comments/art1", json={"text": "Hi"})

        assert response.status_code == 401

    def test_comments_listed_with_article(self, client, auth_headers):
        for text in ["one", "two"]:
            client.post("/api/comments/art2", json={"text": text}, headers=auth_headers())

        response = client.get("/api/articles/art2")

        assert [c["text"] for c in response.json()["comments"]] == ["one", "two"]


class TestCatalogApi:

    def test_list_articles(self, client):
        response = client.get("/api/articles")

        articles = {a["id"]: a for a in response.json()}
        assert set(articles) == {"art1", "art2"}
        assert articles["art1"]["likesCount"] == 5
        assert articles["art1"]["paragraphs"] == ["Cobblestones and coffee.", "More coffee."]
        assert articles["art1"]["comments"] == []

    def test_unknown_article_is_404(self, client):
        response = client.get("/api/articles/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert "message" in response.json()

    def test_health(self, client):
        response = client.get("/health")

        assert response.json()["status"] == "healthy"
