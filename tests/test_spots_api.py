"""
SpotBnB Backend — Spot API Tests
==================================

What:  End-to-end tests of /api/spots against a real (SQLite) database.
How:   HTTPX AsyncClient → ASGI app → SpotService → SQLAlchemy → SQLite.

What we test:
    ✅ Create/read/list/edit/delete spots with the right status codes
    ✅ Ownership: non-owners get 403 and the spot is left unchanged
    ✅ Image add/delete, including an image addressed through another spot
    ✅ Reviews: listing with reviewer + images, one review per user per spot
    ✅ Validation: 400 with one message per failed field
"""

import pytest

from spotbnb.database import async_session_factory
from spotbnb.models import Review, ReviewImage, Spot, SpotImage


async def _create_spot(client, user, **overrides):
    payload = {
        "address": "1 Main St",
        "city": "X",
        "state": "Y",
        "country": "Z",
        "lat": 10,
        "lng": 10,
        "name": "A",
        "description": "d",
        "price": 5,
    }
    payload.update(overrides)
    return await client.post("/api/spots", json=payload, headers=user.headers)


class TestCreateSpot:

    @pytest.mark.asyncio
    async def test_create_spot_returns_record(self, test_client, owner):
        response = await _create_spot(test_client, owner)

        assert response.status_code == 201
        body = response.json()
        assert isinstance(body["id"], int)
        assert body["ownerId"] == owner.id
        assert body["address"] == "1 Main St"
        assert body["lat"] == 10
        assert body["price"] == 5
        assert "createdAt" in body and "updatedAt" in body

    @pytest.mark.asyncio
    async def test_create_requires_authentication(self, test_client):
        response = await test_client.post("/api/spots", json={})

        assert response.status_code == 401
        assert response.json() == {"message": "Authentication required"}

    @pytest.mark.asyncio
    async def test_missing_fields_report_each_field(self, test_client, owner):
        response = await test_client.post(
            "/api/spots", json={"address": "1 Main St"}, headers=owner.headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Bad Request"
        assert set(body["errors"]) == {
            "city", "state", "country", "lat", "lng", "name", "description", "price",
        }
        assert body["errors"]["lat"] == "Latitude is required."

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("lat", 90.1, "Latitude must be a number between -90 and 90."),
            ("lat", -95, "Latitude must be a number between -90 and 90."),
            ("lng", 180.5, "Longitude must be a number between -180 and 180."),
            ("lng", -200, "Longitude must be a number between -180 and 180."),
        ],
    )
    @pytest.mark.asyncio
    async def test_coordinates_out_of_range(self, test_client, owner, field, value, message):
        response = await _create_spot(test_client, owner, **{field: value})

        assert response.status_code == 400
        assert response.json()["errors"] == {field: message}

    @pytest.mark.asyncio
    async def test_nothing_stored_on_validation_failure(self, test_client, owner):
        await _create_spot(test_client, owner, price=0)

        response = await test_client.get("/api/spots")
        assert response.json() == {"Spots": []}


class TestReadSpots:

    @pytest.mark.asyncio
    async def test_list_spots(self, test_client, spot):
        response = await test_client.get("/api/spots")

        assert response.status_code == 200
        spots = response.json()["Spots"]
        assert [s["id"] for s in spots] == [spot]
        assert spots[0]["name"] == "Harbor Loft"

    @pytest.mark.asyncio
    async def test_get_spot(self, test_client, spot, owner):
        response = await test_client.get(f"/api/spots/{spot}")

        assert response.status_code == 200
        assert response.json()["ownerId"] == owner.id

    @pytest.mark.asyncio
    async def test_get_unknown_spot(self, test_client):
        response = await test_client.get("/api/spots/9999")

        assert response.status_code == 404
        assert response.json() == {"message": "Spot could not be found."}

    @pytest.mark.asyncio
    async def test_non_numeric_spot_id(self, test_client):
        response = await test_client.get("/api/spots/abc")

        assert response.status_code == 400
        assert "spot_id" in response.json()["errors"]


class TestEditSpot:

    @pytest.mark.asyncio
    async def test_owner_can_edit_subset(self, test_client, spot, owner):
        response = await test_client.patch(
            f"/api/spots/{spot}", json={"name": "Harbor Suite", "price": "210"},
            headers=owner.headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Harbor Suite"
        assert body["price"] == 210
        assert body["city"] == "Portland"

    @pytest.mark.asyncio
    async def test_non_owner_gets_403_and_spot_unchanged(self, test_client, spot, other_user):
        response = await test_client.patch(
            f"/api/spots/{spot}", json={"name": "Hijacked"}, headers=other_user.headers
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized."}
        detail = await test_client.get(f"/api/spots/{spot}")
        assert detail.json()["name"] == "Harbor Loft"

    @pytest.mark.asyncio
    async def test_edit_unknown_spot(self, test_client, owner):
        response = await test_client.patch(
            "/api/spots/9999", json={"name": "Nope"}, headers=owner.headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_edit_rejects_out_of_range_lng(self, test_client, spot, owner):
        response = await test_client.patch(
            f"/api/spots/{spot}", json={"lng": 181}, headers=owner.headers
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "lng": "Longitude must be a number between -180 and 180."
        }

    @pytest.mark.asyncio
    async def test_patch_without_body_changes_nothing(self, test_client, spot, owner):
        response = await test_client.patch(f"/api/spots/{spot}", headers=owner.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Harbor Loft"
        assert body["price"] == 180


class TestDeleteSpot:

    @pytest.mark.asyncio
    async def test_owner_deletes_spot_and_children(self, test_client, spot, owner, other_user):
        await test_client.post(
            f"/api/spots/{spot}/images", json={"url": "https://img/1.jpg", "preview": True},
            headers=owner.headers,
        )
        await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "Lovely", "stars": 5},
            headers=other_user.headers,
        )

        response = await test_client.delete(f"/api/spots/{spot}", headers=owner.headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Spot successfully deleted."}
        assert (await test_client.get(f"/api/spots/{spot}")).status_code == 404
        async with async_session_factory() as session:
            assert await session.get(Spot, spot) is None
            images = await session.execute(SpotImage.__table__.select())
            reviews = await session.execute(Review.__table__.select())
            assert images.all() == []
            assert reviews.all() == []

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, test_client, spot, other_user):
        response = await test_client.delete(f"/api/spots/{spot}", headers=other_user.headers)

        assert response.status_code == 403
        assert (await test_client.get(f"/api/spots/{spot}")).status_code == 200

    @pytest.mark.asyncio
    async def test_delete_unknown_spot(self, test_client, owner):
        response = await test_client.delete("/api/spots/9999", headers=owner.headers)
        assert response.status_code == 404


class TestSpotImages:

    @pytest.mark.asyncio
    async def test_owner_adds_image(self, test_client, spot, owner):
        response = await test_client.post(
            f"/api/spots/{spot}/images", json={"url": "https://img/1.jpg", "preview": True},
            headers=owner.headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"id", "url", "preview"}
        assert body["url"] == "https://img/1.jpg"
        assert body["preview"] is True

    @pytest.mark.asyncio
    async def test_non_owner_cannot_add_image(self, test_client, spot, other_user):
        response = await test_client.post(
            f"/api/spots/{spot}/images", json={"url": "https://img/x.jpg"},
            headers=other_user.headers,
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_add_image_to_unknown_spot(self, test_client, owner):
        response = await test_client.post(
            "/api/spots/9999/images", json={"url": "https://img/x.jpg"}, headers=owner.headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_owner_deletes_image(self, test_client, spot, owner):
        created = await test_client.post(
            f"/api/spots/{spot}/images", json={"url": "https://img/1.jpg"}, headers=owner.headers
        )
        image_id = created.json()["id"]

        response = await test_client.delete(
            f"/api/spots/{spot}/images/{image_id}", headers=owner.headers
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Image successfully deleted."}

    @pytest.mark.asyncio
    async def test_delete_unknown_image(self, test_client, spot, owner):
        response = await test_client.delete(
            f"/api/spots/{spot}/images/9999", headers=owner.headers
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Spot image could not be found."}

    @pytest.mark.asyncio
    async def test_image_of_another_spot_is_not_deleted(self, test_client, spot, owner):
        second = (await _create_spot(test_client, owner, name="Second")).json()["id"]
        created = await test_client.post(
            f"/api/spots/{spot}/images", json={"url": "https://img/1.jpg"}, headers=owner.headers
        )
        image_id = created.json()["id"]

        response = await test_client.delete(
            f"/api/spots/{second}/images/{image_id}", headers=owner.headers
        )

        assert response.status_code == 403
        assert response.json() == {"message": "You can only delete images from your own spot."}
        async with async_session_factory() as session:
            assert await session.get(SpotImage, image_id) is not None


class TestReviews:

    @pytest.mark.asyncio
    async def test_create_review(self, test_client, spot, other_user):
        response = await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "Great", "stars": 4},
            headers=other_user.headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["spotId"] == spot
        assert body["userId"] == other_user.id
        assert body["stars"] == 4

    @pytest.mark.asyncio
    async def test_second_review_is_forbidden(self, test_client, spot, other_user):
        payload = {"review": "Great", "stars": 4}
        first = await test_client.post(
            f"/api/spots/{spot}/reviews", json=payload, headers=other_user.headers
        )
        second = await test_client.post(
            f"/api/spots/{spot}/reviews", json=payload, headers=other_user.headers
        )

        assert first.status_code == 201
        assert second.status_code == 403
        assert second.json() == {"message": "User has already reviewed this spot."}

    @pytest.mark.asyncio
    async def test_empty_review_rejected(self, test_client, spot, other_user):
        response = await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "", "stars": 3},
            headers=other_user.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Review is required")

    @pytest.mark.asyncio
    async def test_stars_out_of_range_rejected(self, test_client, spot, other_user):
        response = await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "Great", "stars": 7},
            headers=other_user.headers,
        )

        assert response.status_code == 400
        assert response.json() == {
            "message": "Stars rating is required and must be a number between 1 and 5."
        }

    @pytest.mark.asyncio
    async def test_review_unknown_spot(self, test_client, other_user):
        response = await test_client.post(
            "/api/spots/9999/reviews", json={"review": "Great", "stars": 3},
            headers=other_user.headers,
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Spot does not exist."}

    @pytest.mark.asyncio
    async def test_review_without_body_rejected(self, test_client, spot, other_user):
        response = await test_client.post(
            f"/api/spots/{spot}/reviews", headers=other_user.headers
        )

        assert response.status_code == 400
        assert response.json() == {
            "message": "Review is required and must be a string with a maximum "
            "length of 250 characters."
        }

    @pytest.mark.asyncio
    async def test_body_checked_before_duplicate_review(self, test_client, spot, other_user):
        await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "Great", "stars": 4},
            headers=other_user.headers,
        )

        response = await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "", "stars": 4},
            headers=other_user.headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_body_checked_before_spot_lookup(self, test_client, other_user):
        response = await test_client.post(
            "/api/spots/9999/reviews", json={"review": "Great", "stars": 0},
            headers=other_user.headers,
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Stars rating is required")

    @pytest.mark.asyncio
    async def test_timestamps_match_between_create_and_list(self, test_client, spot, other_user):
        created = await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "Great", "stars": 5},
            headers=other_user.headers,
        )

        listed = (await test_client.get(f"/api/spots/{spot}/reviews")).json()["Reviews"][0]
        assert listed["createdAt"] == created.json()["createdAt"]
        assert listed["createdAt"].endswith("Z")

    @pytest.mark.asyncio
    async def test_list_reviews_with_user_and_images(self, test_client, spot, other_user):
        created = await test_client.post(
            f"/api/spots/{spot}/reviews", json={"review": "Great", "stars": 5},
            headers=other_user.headers,
        )
        review_id = created.json()["id"]
        async with async_session_factory() as session:
            session.add(ReviewImage(review_id=review_id, url="https://img/r1.jpg"))
            await session.commit()

        response = await test_client.get(f"/api/spots/{spot}/reviews")

        assert response.status_code == 200
        reviews = response.json()["Reviews"]
        assert len(reviews) == 1
        assert reviews[0]["User"] == {"id": other_user.id, "firstName": "Gus", "lastName": "Guest"}
        assert [img["url"] for img in reviews[0]["ReviewImages"]] == ["https://img/r1.jpg"]
        assert set(reviews[0]["ReviewImages"][0]) == {"id", "url"}

    @pytest.mark.asyncio
    async def test_list_reviews_unknown_spot(self, test_client):
        response = await test_client.get("/api/spots/9999/reviews")

        assert response.status_code == 404
        assert response.json() == {"message": "Spot does not exist."}
