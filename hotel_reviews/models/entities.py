"""
ORM 实体定义
Hotel / HotelType / Room / Booking 由外部系统维护，本服务只读；
Review 只能通过评价准入流程创建，创建后不可修改
"""
from datetime import datetime, UTC
from sqlalchemy import (
    Column, Integer, SmallInteger, String, DateTime, Boolean,
    ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from hotel_reviews.database import Base


def _utcnow() -> datetime:
    """写入时刻 (UTC, naive)"""
    return datetime.now(UTC).replace(tzinfo=None)


class HotelType(Base):
    """
    酒店类别
    review_enabled: 类别级评价开关，由管理端维护
    """
    __tablename__ = "hotel_types"

    id = Column(Integer, primary_key=True, index=True)
    type_name = Column(String(100), unique=True, nullable=False)
    review_enabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    hotels = relationship("Hotel", back_populates="hotel_type")


class Hotel(Base):
    """酒店"""
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    hotel_type_id = Column(Integer, ForeignKey("hotel_types.id"), nullable=False)

    hotel_type = relationship("HotelType", back_populates="hotels")
    rooms = relationship("Room", back_populates="hotel")


class Room(Base):
    """房间"""
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False)
    room_number = Column(String(20), nullable=False)

    hotel = relationship("Hotel", back_populates="rooms")


class Booking(Base):
    """预订记录 - 评价人身份通过预订间接获得"""
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    guest_email = Column(String(255), nullable=False)
    guest_name = Column(String(200))


class Review(Base):
    """
    评价
    booking_id 唯一：一个预订最多一条评价，这是并发写入时的最终保障
    """
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
        Index("idx_review_room_rating", "room_id", "rating"),
    )

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, unique=True)
    rating = Column(SmallInteger, nullable=False)
    comment = Column(String(1000))
    created_at = Column(DateTime, nullable=False, default=_utcnow, index=True)
