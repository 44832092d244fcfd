"""
Pytest 配置和共享 fixtures
"""
import base64
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotel_reviews.config import settings
from hotel_reviews.database import Base, get_db
from hotel_reviews.dependencies import get_feature_resolver
from hotel_reviews.models.entities import HotelType, Hotel, Room, Booking
from hotel_reviews.security.auth import get_password_hash
from hotel_reviews.services.feature_toggle_service import FeatureResolver
from hotel_reviews.main import app

TEST_USERNAME = "admin"
TEST_PASSWORD = "review-secret"


class StubFeatureResolver(FeatureResolver):
    """可控的全局开关，记录调用次数"""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.calls = 0

    def is_globally_enabled(self) -> bool:
        self.calls += 1
        return self.enabled


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_resolver():
    """构造可控全局开关"""
    return StubFeatureResolver


@pytest.fixture
def feature_resolver():
    """默认全局开启"""
    return StubFeatureResolver(enabled=True)


@pytest.fixture(scope="function")
def client(db_session, feature_resolver):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_feature_resolver] = lambda: feature_resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 认证相关 Fixtures ==============

def _basic(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def api_credentials(monkeypatch):
    """使用 bcrypt 哈希配置 API 凭证"""
    monkeypatch.setattr(settings, "API_USERNAME", TEST_USERNAME)
    monkeypatch.setattr(settings, "API_PASSWORD_HASH", get_password_hash(TEST_PASSWORD))
    return TEST_USERNAME, TEST_PASSWORD


@pytest.fixture
def auth_headers(api_credentials):
    """返回带认证的请求头"""
    return _basic(*api_credentials)


@pytest.fixture
def bad_auth_headers(api_credentials):
    """错误密码"""
    return _basic(api_credentials[0], "wrong-password")


# ============== 实体相关 Fixtures ==============

def make_hotel_type(db, type_name="Luxury", review_enabled=True):
    hotel_type = HotelType(type_name=type_name, review_enabled=review_enabled)
    db.add(hotel_type)
    db.flush()
    return hotel_type


def make_hotel(db, hotel_type, name="Grand Palace"):
    hotel = Hotel(name=name, hotel_type_id=hotel_type.id)
    db.add(hotel)
    db.flush()
    return hotel


def make_room(db, hotel, room_number="101"):
    room = Room(hotel_id=hotel.id, room_number=room_number)
    db.add(room)
    db.flush()
    return room


def make_booking(db, room, guest_email="guest@example.com", guest_name="Alice"):
    booking = Booking(room_id=room.id, guest_email=guest_email, guest_name=guest_name)
    db.add(booking)
    db.flush()
    return booking


@pytest.fixture
def sample_hotel_type(db_session):
    """开启评价的酒店类别"""
    hotel_type = make_hotel_type(db_session)
    db_session.commit()
    return hotel_type


@pytest.fixture
def sample_hotel(db_session, sample_hotel_type):
    hotel = make_hotel(db_session, sample_hotel_type)
    db_session.commit()
    return hotel


@pytest.fixture
def sample_room(db_session, sample_hotel):
    room = make_room(db_session, sample_hotel, "101")
    db_session.commit()
    return room


@pytest.fixture
def sample_room_102(db_session, sample_hotel):
    room = make_room(db_session, sample_hotel, "102")
    db_session.commit()
    return room


@pytest.fixture
def sample_booking(db_session, sample_room):
    booking = make_booking(db_session, sample_room)
    db_session.commit()
    return booking
