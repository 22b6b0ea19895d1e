"""End-to-end tests for /api/posts routes."""

import pytest
from httpx import AsyncClient

API = "/api/posts"


async def create_post(
    client: AsyncClient,
    headers: dict[str, str],
    title: str,
    content: str,
) -> dict:
    response = await client.post(API, json={"title": title, "content": content}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestCreatePost:
    async def test_create_and_fetch(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        post_payload: dict[str, str],
    ) -> None:
        response = await client.post(API, json=post_payload, headers=alice_headers)

        assert response.status_code == 200
        created = response.json()
        assert set(created) == {"id", "title", "content", "imageURL", "author", "createdAt"}
        assert created["author"] == "alice"
        assert created["imageURL"] == post_payload["imageURL"]

        fetched = await client.get(f"{API}/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == created

    async def test_author_in_body_ignored(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        post_payload: dict[str, str],
    ) -> None:
        response = await client.post(
            API,
            json={**post_payload, "author": "mallory"},
            headers=alice_headers,
        )

        assert response.json()["author"] == "alice"

    async def test_requires_token(self, client: AsyncClient, post_payload: dict[str, str]) -> None:
        response = await client.post(API, json=post_payload)

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_rejects_bad_tokens(
        self,
        client: AsyncClient,
        post_payload: dict[str, str],
        expired_token: str,
    ) -> None:
        for header in (
            "Bearer not-a-jwt",
            f"Bearer {expired_token}",
            "Basic dXNlcjpwYXNz",
            "Bearer",
        ):
            response = await client.post(API, json=post_payload, headers={"Authorization": header})
            assert response.status_code == 401, header

    async def test_validation(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        short_title = await client.post(
            API,
            json={"title": "Hey", "content": long_content},
            headers=alice_headers,
        )
        short_body = await client.post(
            API,
            json={"title": "Hello World", "content": "too short"},
            headers=alice_headers,
        )

        assert short_title.status_code == 400
        assert short_title.json()["errors"][0]["field"] == "title"
        assert short_body.status_code == 400
        assert short_body.json()["errors"][0]["field"] == "content"


class TestGetPost:
    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.get(f"{API}/9999")

        assert response.status_code == 404
        assert response.json() == {"detail": "Post with ID 9999 not found"}

    async def test_non_integer_id(self, client: AsyncClient) -> None:
        response = await client.get(f"{API}/abc")

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "post_id",
        ["0", "-5", "100000000000000000000", "-100000000000000000000"],
    )
    async def test_out_of_range_id_not_found(self, client: AsyncClient, post_id: str) -> None:
        response = await client.get(f"{API}/{post_id}")

        assert response.status_code == 404
        assert response.json() == {"detail": f"Post with ID {post_id} not found"}


class TestUpdatePost:
    async def test_author_updates(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        post = await create_post(client, alice_headers, "Original title", long_content)

        response = await client.put(
            f"{API}/{post['id']}",
            json={"title": "Updated title"},
            headers=alice_headers,
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "Updated title"
        assert updated["content"] == long_content
        assert updated["createdAt"] == post["createdAt"]
        assert updated["author"] == "alice"

    async def test_other_user_forbidden(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        long_content: str,
    ) -> None:
        post = await create_post(client, alice_headers, "Original title", long_content)

        response = await client.put(
            f"{API}/{post['id']}",
            json={"title": "Hijacked title"},
            headers=bob_headers,
        )

        assert response.status_code == 403
        assert (await client.get(f"{API}/{post['id']}")).json()["title"] == "Original title"

    async def test_missing_post_is_404_for_anyone(
        self,
        client: AsyncClient,
        bob_headers: dict[str, str],
    ) -> None:
        response = await client.put(f"{API}/9999", json={"title": "Whatever"}, headers=bob_headers)

        assert response.status_code == 404

    async def test_requires_token(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        post = await create_post(client, alice_headers, "Original title", long_content)

        response = await client.put(f"{API}/{post['id']}", json={"title": "No token here"})

        assert response.status_code == 401

    async def test_invalid_update(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        post = await create_post(client, alice_headers, "Original title", long_content)

        response = await client.put(
            f"{API}/{post['id']}",
            json={"title": None},
            headers=alice_headers,
        )

        assert response.status_code == 400


class TestDeletePost:
    async def test_delete_then_gone(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        post = await create_post(client, alice_headers, "Short lived post", long_content)

        first = await client.delete(f"{API}/{post['id']}", headers=alice_headers)
        second = await client.delete(f"{API}/{post['id']}", headers=alice_headers)

        assert first.status_code == 200
        assert first.json() == {"message": "Post deleted"}
        assert second.status_code == 404
        assert (await client.get(f"{API}/{post['id']}")).status_code == 404

    async def test_other_user_forbidden(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        long_content: str,
    ) -> None:
        post = await create_post(client, alice_headers, "Alice owns this", long_content)

        response = await client.delete(f"{API}/{post['id']}", headers=bob_headers)

        assert response.status_code == 403
        assert (await client.get(f"{API}/{post['id']}")).status_code == 200

    async def test_out_of_range_id_not_found(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
    ) -> None:
        response = await client.delete(f"{API}/100000000000000000000", headers=alice_headers)

        assert response.status_code == 404


class TestListPosts:
    async def test_empty(self, client: AsyncClient) -> None:
        response = await client.get(API)

        assert response.status_code == 200
        assert response.json() == {"posts": [], "total": 0, "page": 1, "pages": 0}

    async def test_pagination(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        for i in range(15):
            await create_post(client, alice_headers, f"Post number {i:02d}", long_content)

        first = (await client.get(API, params={"page": 1, "limit": 10})).json()
        second = (await client.get(API, params={"page": 2, "limit": 10})).json()

        assert (first["total"], first["pages"], len(first["posts"])) == (15, 2, 10)
        assert (second["total"], second["pages"], len(second["posts"])) == (15, 2, 5)
        ids = [p["id"] for p in first["posts"] + second["posts"]]
        assert len(set(ids)) == 15
        assert first["posts"][0]["title"] == "Post number 14"

    async def test_search_by_author(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        long_content: str,
    ) -> None:
        await create_post(client, alice_headers, "First by her", long_content)
        await create_post(client, bob_headers, "Bob writes", long_content)
        await create_post(client, bob_headers, "Thinking about Alice", long_content)

        data = (await client.get(API, params={"search": "ALICE"})).json()

        assert data["total"] == 2
        assert {p["title"] for p in data["posts"]} == {"First by her", "Thinking about Alice"}

    async def test_page_beyond_end(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        await create_post(client, alice_headers, "Only one post", long_content)

        data = (await client.get(API, params={"page": 5})).json()

        assert data == {"posts": [], "total": 1, "page": 5, "pages": 1}

    async def test_last_allowed_page(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        long_content: str,
    ) -> None:
        await create_post(client, alice_headers, "Only one post", long_content)

        response = await client.get(API, params={"page": 2**31 - 1, "limit": 100})

        assert response.status_code == 200
        assert response.json() == {"posts": [], "total": 1, "page": 2**31 - 1, "pages": 1}

    async def test_invalid_params(self, client: AsyncClient) -> None:
        for params in (
            {"page": 0},
            {"page": 10**19},
            {"limit": 0},
            {"limit": 101},
            {"page": "x"},
        ):
            response = await client.get(API, params=params)
            assert response.status_code == 400, params
