"""
评价仓储

负责 Hotel / HotelType / Room / Booking 的只读查询和 Review 的持久化。
所有查找方法在未找到时返回 None，由服务层转换为业务异常。
"""
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from hotel_reviews.models.entities import Hotel, HotelType, Room, Booking, Review

# 允许排序的字段 (API 字段名 -> 列)
SORTABLE_COLUMNS = {
    "createdAt": Review.created_at,
    "rating": Review.rating,
}

SortOrder = Tuple[str, str]  # (字段名, "asc" | "desc")


class ReviewRepository:
    """
    评价仓储

    所有操作共用调用方传入的会话，保证同一次请求内的读写一致。
    """

    def __init__(self, db: Session):
        self.db = db

    # ============== 只读实体 ==============

    def find_hotel(self, hotel_id: int) -> Optional[Hotel]:
        return self.db.query(Hotel).filter(Hotel.id == hotel_id).first()

    def find_hotel_type(self, hotel_type_id: int) -> Optional[HotelType]:
        return self.db.query(HotelType).filter(HotelType.id == hotel_type_id).first()

    def find_room(self, room_id: int) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    def find_booking(self, booking_id: int) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    # ============== 评价 ==============

    def find_review_by_booking(self, booking_id: int) -> Optional[Review]:
        return self.db.query(Review).filter(Review.booking_id == booking_id).first()

    def exists_review_for_booking(self, booking_id: int) -> bool:
        return self.db.query(
            self.db.query(Review).filter(Review.booking_id == booking_id).exists()
        ).scalar()

    def save_review(self, review: Review) -> Review:
        """
        保存评价并提交

        唯一约束冲突时抛出 sqlalchemy IntegrityError，会话已回滚。
        """
        self.db.add(review)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(review)
        return review

    def count_reviews_by_room(self, room_id: int) -> int:
        return self.db.query(func.count(Review.id)).filter(Review.room_id == room_id).scalar() or 0

    def avg_rating_by_room(self, room_id: int) -> Optional[float]:
        avg = self.db.query(func.avg(Review.rating)).filter(Review.room_id == room_id).scalar()
        return float(avg) if avg is not None else None

    def count_reviews_by_room_and_rating(self, room_id: int, rating: int) -> int:
        return self.db.query(func.count(Review.id)).filter(
            Review.room_id == room_id,
            Review.rating == rating
        ).scalar() or 0

    def page_reviews_by_room(self, room_id: int, page: int, size: int,
                             orders: Sequence[SortOrder]) -> Tuple[List[Review], int]:
        """分页查询房间评价，返回 (当前页, 总数)"""
        query = self.db.query(Review).filter(Review.room_id == room_id)
        total = query.count()

        order_by = []
        for field, direction in orders:
            column = SORTABLE_COLUMNS[field]
            order_by.append(column.asc() if direction == "asc" else column.desc())
        # 时间戳相同时按 id 倒序，保证分页稳定
        order_by.append(Review.id.desc())

        items = query.order_by(*order_by).offset(page * size).limit(size).all()
        return items, total
