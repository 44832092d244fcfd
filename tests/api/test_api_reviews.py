"""
评价 API 测试
覆盖 /api/reviews 端点：提交、分页查询、统计、错误响应格式
"""
from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from hotel_reviews.models.entities import Booking, Review


def _payload(room, booking, **overrides):
    data = {
        "room_id": room.id,
        "booking_id": booking.id,
        "rating": 5,
        "comment": "Lovely room",
        "reviewer_email": "guest@example.com",
        "reviewer_name": "Alice",
    }
    data.update(overrides)
    return data


def _seed_reviews(db, room, ratings):
    base = datetime(2025, 3, 1, 9, 0, 0)
    for i, rating in enumerate(ratings):
        booking = Booking(room_id=room.id, guest_email=f"seed{i}@example.com", guest_name=f"Seed {i}")
        db.add(booking)
        db.flush()
        db.add(Review(room_id=room.id, booking_id=booking.id, rating=rating,
                      created_at=base + timedelta(hours=i)))
    db.commit()


class TestCreateReview:
    """提交评价"""

    def test_create_review(self, client: TestClient, auth_headers, sample_room, sample_booking):
        response = client.post("/api/reviews", headers=auth_headers,
                               json=_payload(sample_room, sample_booking))

        assert response.status_code == 201
        data = response.json()
        assert data["review_id"] > 0
        assert data["room_id"] == sample_room.id
        assert data["booking_id"] == sample_booking.id
        assert data["rating"] == 5
        assert data["reviewer_email"] == "guest@example.com"
        assert data["reviewer_name"] == "Alice"
        assert data["created_at"]

    def test_duplicate_review(self, client: TestClient, auth_headers, db_session, sample_room, sample_booking):
        first = client.post("/api/reviews", headers=auth_headers, json=_payload(sample_room, sample_booking))
        second = client.post("/api/reviews", headers=auth_headers,
                             json=_payload(sample_room, sample_booking, rating=2))

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["code"] == "DUPLICATE_REVIEW"
        assert db_session.query(Review).count() == 1

    def test_room_not_found(self, client: TestClient, auth_headers, sample_booking):
        response = client.post("/api/reviews", headers=auth_headers, json={
            "room_id": 9999, "booking_id": sample_booking.id, "rating": 4,
            "reviewer_email": "guest@example.com",
        })

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "RESOURCE_NOT_FOUND"
        assert "Room not found" in body["message"]
        assert body["timestamp"]

    def test_booking_room_mismatch(self, client: TestClient, auth_headers, db_session,
                                   sample_room_102, sample_booking):
        response = client.post("/api/reviews", headers=auth_headers,
                               json=_payload(sample_room_102, sample_booking))

        assert response.status_code == 404
        assert db_session.query(Review).count() == 0

    def test_email_mismatch(self, client: TestClient, auth_headers, sample_room, sample_booking):
        response = client.post("/api/reviews", headers=auth_headers,
                               json=_payload(sample_room, sample_booking, reviewer_email="someone@else.com"))

        assert response.status_code == 404
        assert "email" in response.json()["message"]

    def test_globally_disabled(self, client: TestClient, auth_headers, feature_resolver,
                               sample_room, sample_booking):
        feature_resolver.enabled = False

        response = client.post("/api/reviews", headers=auth_headers, json=_payload(sample_room, sample_booking))

        assert response.status_code == 403
        assert response.json()["code"] == "FEATURE_DISABLED"
        assert "globally" in response.json()["message"]

    def test_hotel_type_disabled(self, client: TestClient, auth_headers, db_session,
                                 sample_hotel_type, sample_room, sample_booking):
        sample_hotel_type.review_enabled = False
        db_session.commit()

        response = client.post("/api/reviews", headers=auth_headers, json=_payload(sample_room, sample_booking))

        assert response.status_code == 403
        assert "hotel category" in response.json()["message"]

    def test_rating_out_of_range(self, client: TestClient, auth_headers, db_session, sample_room, sample_booking):
        for rating in (0, 6):
            response = client.post("/api/reviews", headers=auth_headers,
                                   json=_payload(sample_room, sample_booking, rating=rating))
            assert response.status_code == 400
            assert response.json()["code"] == "VALIDATION_ERROR"
        assert db_session.query(Review).count() == 0

    def test_comment_too_long(self, client: TestClient, auth_headers, sample_room, sample_booking):
        response = client.post("/api/reviews", headers=auth_headers,
                               json=_payload(sample_room, sample_booking, comment="x" * 1001))

        assert response.status_code == 400

    def test_invalid_email(self, client: TestClient, auth_headers, sample_room, sample_booking):
        response = client.post("/api/reviews", headers=auth_headers,
                               json=_payload(sample_room, sample_booking, reviewer_email="not-an-email"))

        assert response.status_code == 400
        assert "Validation failed" in response.json()["message"]

    def test_malformed_email_domain(self, client: TestClient, auth_headers, db_session,
                                    sample_room, sample_booking):
        for email in ("guest@example..com", "guest@", "@example.com"):
            response = client.post("/api/reviews", headers=auth_headers,
                                   json=_payload(sample_room, sample_booking, reviewer_email=email))
            assert response.status_code == 400
            assert response.json()["code"] == "VALIDATION_ERROR"
        assert db_session.query(Review).count() == 0

    def test_missing_fields(self, client: TestClient, auth_headers):
        response = client.post("/api/reviews", headers=auth_headers, json={"rating": 3})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_requires_auth(self, client: TestClient, sample_room, sample_booking):
        response = client.post("/api/reviews", json=_payload(sample_room, sample_booking))

        assert response.status_code == 401


class TestListRoomReviews:
    """分页查询"""

    def test_default_order(self, client: TestClient, auth_headers, db_session, sample_room):
        _seed_reviews(db_session, sample_room, [3, 5, 1])

        response = client.get(f"/api/reviews/room/{sample_room.id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [r["rating"] for r in data["items"]] == [1, 5, 3]
        assert data["total_elements"] == 3
        assert data["page"] == 0
        assert data["size"] == 10

    def test_sort_by_rating_asc(self, client: TestClient, auth_headers, db_session, sample_room):
        _seed_reviews(db_session, sample_room, [4, 2, 4, 5])

        response = client.get(f"/api/reviews/room/{sample_room.id}?sortBy=rating,asc", headers=auth_headers)

        items = response.json()["items"]
        assert [r["rating"] for r in items] == [2, 4, 4, 5]
        # 同分按创建时间倒序
        assert items[1]["created_at"] > items[2]["created_at"]

    def test_bogus_sort_falls_back(self, client: TestClient, auth_headers, db_session, sample_room):
        _seed_reviews(db_session, sample_room, [4, 2])

        response = client.get(f"/api/reviews/room/{sample_room.id}?sortBy=bogus,x", headers=auth_headers)

        assert response.status_code == 200
        assert [r["rating"] for r in response.json()["items"]] == [2, 4]

    def test_pagination(self, client: TestClient, auth_headers, db_session, sample_room):
        _seed_reviews(db_session, sample_room, [1, 2, 3, 4, 5])

        response = client.get(f"/api/reviews/room/{sample_room.id}?page=1&size=2", headers=auth_headers)

        data = response.json()
        assert [r["rating"] for r in data["items"]] == [3, 2]
        assert data["total_pages"] == 3

    def test_invalid_page_size(self, client: TestClient, auth_headers, sample_room):
        response = client.get(f"/api/reviews/room/{sample_room.id}?size=0", headers=auth_headers)

        assert response.status_code == 400

    def test_room_not_found(self, client: TestClient, auth_headers):
        response = client.get("/api/reviews/room/9999", headers=auth_headers)

        assert response.status_code == 404


class TestRoomReviewStats:
    """评价统计"""

    def test_stats(self, client: TestClient, auth_headers, db_session, sample_room):
        _seed_reviews(db_session, sample_room, [5, 2, 3, 4, 5])

        response = client.get(f"/api/reviews/stats/{sample_room.id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["room_id"] == sample_room.id
        assert data["total_reviews"] == 5
        assert data["average_rating"] == 3.8
        assert data["rating_distribution"] == {"1": 0, "2": 1, "3": 1, "4": 1, "5": 2}

    def test_stats_empty_room(self, client: TestClient, auth_headers, sample_room):
        response = client.get(f"/api/reviews/stats/{sample_room.id}", headers=auth_headers)

        data = response.json()
        assert data["total_reviews"] == 0
        assert data["average_rating"] is None
        assert data["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}

    def test_stats_room_not_found(self, client: TestClient, auth_headers):
        response = client.get("/api/reviews/stats/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "RESOURCE_NOT_FOUND"
