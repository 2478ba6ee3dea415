import logging

import pytest
from starlette import status

from forum_api.models import Comment, Like, Post
from forum_api.settings import get_settings


logger = logging.getLogger(__name__)
url: str = '/post'

settings = get_settings()


def test_get_posts(client, posts):
    response = client.get(url)
    assert response.status_code == status.HTTP_200_OK
    json_response = response.json()
    assert json_response["total"] == len(posts)
    assert json_response["limit"] == settings.PAGE_LIMIT
    assert json_response["offset"] == 0
    assert [p["title"] for p in json_response["posts"]] == ["Post 4", "Post 3", "Post 2", "Post 1", "Post 0"]


@pytest.mark.parametrize(
    'query,titles',
    [
        ({"limit": 2}, ["Post 4", "Post 3"]),
        ({"limit": 2, "offset": 2}, ["Post 2", "Post 1"]),
        ({"limit": 2, "offset": 4}, ["Post 0"]),
        ({"offset": 10}, []),
        ({"category": "news"}, ["Post 3", "Post 2", "Post 0"]),
        ({"category": "news", "limit": 1, "offset": 1}, ["Post 2"]),
    ],
)
def test_get_posts_page(client, posts, query, titles):
    response = client.get(url, params=query)
    assert response.status_code == status.HTTP_200_OK
    assert [p["title"] for p in response.json()["posts"]] == titles


@pytest.mark.parametrize(
    'query,response_status',
    [
        ({"limit": 0}, status.HTTP_422_UNPROCESSABLE_ENTITY),
        ({"limit": settings.MAX_PAGE_LIMIT + 1}, status.HTTP_422_UNPROCESSABLE_ENTITY),
        ({"offset": -1}, status.HTTP_422_UNPROCESSABLE_ENTITY),
        ({"category": "unknown"}, status.HTTP_404_NOT_FOUND),
    ],
)
def test_get_posts_bad_query(client, posts, query, response_status):
    assert client.get(url, params=query).status_code == response_status


def test_create_post(auth_client, dbsession, user, category):
    body = {"title": "  Hello  ", "content": "World", "category_ids": [category.id, category.id, 9999]}
    response = auth_client.post(url, json=body)
    assert response.status_code == status.HTTP_200_OK, response.text
    json_response = response.json()
    assert json_response["title"] == "Hello"
    assert json_response["user_id"] == user.id
    assert json_response["username"] == user.username
    assert json_response["like_count"] == 0 and json_response["dislike_count"] == 0
    assert [c["slug"] for c in json_response["categories"]] == ["news"]
    assert dbsession.query(Post).filter(Post.id == json_response["id"]).one_or_none() is not None


def test_create_post_unauthenticated(client, dbsession):
    response = client.post(url, json={"title": "Hello", "content": "World"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert dbsession.query(Post).count() == 0


@pytest.mark.parametrize(
    'body,response_status',
    [
        ({"title": "", "content": "World"}, status.HTTP_400_BAD_REQUEST),
        ({"title": "   ", "content": "World"}, status.HTTP_400_BAD_REQUEST),
        ({"title": "Hello", "content": "\n\t"}, status.HTTP_400_BAD_REQUEST),
        ({"title": "x" * 256, "content": "World"}, status.HTTP_400_BAD_REQUEST),
        ({"title": "Hello", "content": "x" * 10001}, status.HTTP_400_BAD_REQUEST),
        ({"title": "Hello"}, status.HTTP_422_UNPROCESSABLE_ENTITY),
        ({"title": "x" * 255, "content": "x" * 10000}, status.HTTP_200_OK),
    ],
)
def test_create_post_validation(auth_client, dbsession, body, response_status):
    response = auth_client.post(url, json=body)
    assert response.status_code == response_status, response.text
    assert dbsession.query(Post).count() == (1 if response_status == status.HTTP_200_OK else 0)


def test_get_post(client, post, comment):
    response = client.get(f"{url}/{post.id}")
    assert response.status_code == status.HTTP_200_OK
    json_response = response.json()
    assert json_response["title"] == post.title
    assert json_response["reaction"] is None
    assert [c["id"] for c in json_response["comments"]] == [comment.id]
    assert json_response["comments"][0]["username"] == "bob"
    assert [c["name"] for c in json_response["categories"]] == ["News"]


def test_get_post_with_reaction(another_client, post):
    another_client.put(f"/like/post/{post.id}/dislike")
    json_response = another_client.get(f"{url}/{post.id}").json()
    assert json_response["reaction"] == "dislike"
    assert json_response["dislike_count"] == 1


def test_get_post_not_found(client):
    assert client.get(f"{url}/9999").status_code == status.HTTP_404_NOT_FOUND


def test_update_post(auth_client, dbsession, post):
    response = auth_client.patch(f"{url}/{post.id}", json={"title": "Edited", "category_ids": []})
    assert response.status_code == status.HTTP_200_OK, response.text
    json_response = response.json()
    assert json_response["title"] == "Edited"
    assert json_response["content"] == "Hello, forum!"
    assert json_response["categories"] == []
    assert json_response["updated"] >= json_response["created"]


def test_update_post_keeps_categories(auth_client, post):
    response = auth_client.patch(f"{url}/{post.id}", json={"content": "Edited"})
    assert response.status_code == status.HTTP_200_OK
    assert [c["slug"] for c in response.json()["categories"]] == ["news"]


def test_update_post_empty_title(auth_client, dbsession, post):
    response = auth_client.patch(f"{url}/{post.id}", json={"title": " "})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    dbsession.expire_all()
    assert dbsession.query(Post).filter(Post.id == post.id).one().title == "First post"


def test_update_post_not_author(another_client, dbsession, post):
    response = another_client.patch(f"{url}/{post.id}", json={"title": "Hijacked"})
    assert response.status_code == status.HTTP_403_FORBIDDEN
    dbsession.expire_all()
    assert dbsession.query(Post).filter(Post.id == post.id).one().title == "First post"


def test_delete_post_not_author(another_client, dbsession, post):
    response = another_client.delete(f"{url}/{post.id}")
    assert response.status_code == status.HTTP_403_FORBIDDEN
    dbsession.expire_all()
    unchanged = dbsession.query(Post).filter(Post.id == post.id).one()
    assert unchanged.title == "First post"
    assert unchanged.content == "Hello, forum!"


def test_delete_post(auth_client, another_client, dbsession, post, comment):
    post_id, comment_id = post.id, comment.id
    another_client.put(f"/like/post/{post_id}/like")
    another_client.put(f"/like/comment/{comment_id}/like")

    response = auth_client.delete(f"{url}/{post_id}")
    assert response.status_code == status.HTTP_200_OK
    assert auth_client.get(f"{url}/{post_id}").status_code == status.HTTP_404_NOT_FOUND
    dbsession.expire_all()
    assert dbsession.query(Comment).filter(Comment.post_id == post_id).count() == 0
    assert dbsession.query(Like).count() == 0


def test_delete_post_twice(auth_client, post):
    post_id = post.id
    assert auth_client.delete(f"{url}/{post_id}").status_code == status.HTTP_200_OK
    assert auth_client.delete(f"{url}/{post_id}").status_code == status.HTTP_404_NOT_FOUND
