import logging

import pytest
from starlette import status

from forum_api.models import Category, Post
from forum_api.utils.category import create_category


logger = logging.getLogger(__name__)
url: str = '/category'


def test_get_categories(client, dbsession, category):
    create_category("Announcements", "announcements", session=dbsession)
    dbsession.commit()
    response = client.get(url)
    assert response.status_code == status.HTTP_200_OK
    assert [c["slug"] for c in response.json()] == ["announcements", "news"]


def test_get_category(client, category, posts):
    response = client.get(f"{url}/news", params={"limit": 2})
    assert response.status_code == status.HTTP_200_OK
    json_response = response.json()
    assert json_response["name"] == "News"
    assert json_response["description"] == "Site news"
    assert json_response["total"] == 3
    assert [p["title"] for p in json_response["posts"]] == ["Post 3", "Post 2"]


def test_get_category_not_found(client):
    assert client.get(f"{url}/missing").status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize(
    'body,response_status',
    [
        ({"name": "Games", "slug": "games"}, status.HTTP_200_OK),
        ({"name": " Games ", "slug": "video-games-2", "description": "All about games"}, status.HTTP_200_OK),
        ({"name": "Games", "slug": "Games"}, status.HTTP_400_BAD_REQUEST),
        ({"name": "Games", "slug": "video games"}, status.HTTP_400_BAD_REQUEST),
        ({"name": "", "slug": "games"}, status.HTTP_400_BAD_REQUEST),
        ({"name": "x" * 101, "slug": "games"}, status.HTTP_400_BAD_REQUEST),
        ({"name": "Games", "slug": "games", "description": "x" * 501}, status.HTTP_400_BAD_REQUEST),
        ({"name": "News", "slug": "games"}, status.HTTP_409_CONFLICT),
        ({"name": "Games", "slug": "news"}, status.HTTP_409_CONFLICT),
    ],
)
def test_create_category(admin_client, dbsession, category, body, response_status):
    response = admin_client.post(url, json=body)
    assert response.status_code == response_status, response.text
    if response_status == status.HTTP_200_OK:
        assert response.json()["name"] == "Games"
    assert dbsession.query(Category).count() == (2 if response_status == status.HTTP_200_OK else 1)


def test_create_category_unauthenticated(client):
    response = client.post(url, json={"name": "Games", "slug": "games"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_update_category(admin_client, category):
    response = admin_client.patch(f"{url}/{category.id}", json={"description": "Fresh news"})
    assert response.status_code == status.HTTP_200_OK
    json_response = response.json()
    assert json_response["description"] == "Fresh news"
    assert json_response["slug"] == "news"


def test_update_category_conflict(admin_client, dbsession, category):
    other = create_category("Games", "games", session=dbsession)
    dbsession.commit()
    response = admin_client.patch(f"{url}/{other.id}", json={"slug": "news"})
    assert response.status_code == status.HTTP_409_CONFLICT
    # Same values as the category already has are not a conflict
    response = admin_client.patch(f"{url}/{category.id}", json={"name": "News", "slug": "news"})
    assert response.status_code == status.HTTP_200_OK


def test_delete_category(admin_client, dbsession, category, post):
    category_id, post_id = category.id, post.id
    response = admin_client.delete(f"{url}/{category_id}")
    assert response.status_code == status.HTTP_200_OK
    assert admin_client.get(f"{url}/news").status_code == status.HTTP_404_NOT_FOUND

    json_response = admin_client.get(f"/post/{post_id}").json()
    assert json_response["categories"] == []
    dbsession.expire_all()
    assert dbsession.query(Post).filter(Post.id == post_id).one_or_none() is not None


def test_delete_category_not_found(admin_client):
    assert admin_client.delete(f"{url}/9999").status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize(
    'method,path,body',
    [
        ('post', url, {"name": "Games", "slug": "games"}),
        ('patch', f"{url}/{{id}}", {"name": "Renamed"}),
        ('delete', f"{url}/{{id}}", None),
    ],
)
def test_manage_category_not_admin(another_client, dbsession, category, post, method, path, body):
    kwargs = {"json": body} if body is not None else {}
    response = getattr(another_client, method)(path.format(id=category.id), **kwargs)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    dbsession.expire_all()
    assert [c.name for c in dbsession.query(Category).all()] == ["News"]
    assert [c["slug"] for c in another_client.get(f"/post/{post.id}").json()["categories"]] == ["news"]
