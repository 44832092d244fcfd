"""
初始化数据脚本
创建：酒店类别（一个开启评价、一个关闭评价）、酒店、房间、预订

  Luxury    review_enabled = True
    └── Grand Palace Hotel   房间 101, 102
  Budget    review_enabled = False
    └── City Inn             房间 201

预订：
  guest1@example.com  -> 101
  guest2@example.com  -> 101
  guest3@example.com  -> 102
  guest4@example.com  -> 201
"""
import logging

from hotel_reviews.database import SessionLocal, init_db
from hotel_reviews.models.entities import HotelType, Hotel, Room, Booking

logger = logging.getLogger(__name__)


def get_or_create_hotel_type(db, type_name: str, review_enabled: bool) -> HotelType:
    hotel_type = db.query(HotelType).filter(HotelType.type_name == type_name).first()
    if not hotel_type:
        hotel_type = HotelType(type_name=type_name, review_enabled=review_enabled)
        db.add(hotel_type)
        db.flush()
    return hotel_type


def get_or_create_hotel(db, name: str, hotel_type: HotelType) -> Hotel:
    hotel = db.query(Hotel).filter(Hotel.name == name).first()
    if not hotel:
        hotel = Hotel(name=name, hotel_type_id=hotel_type.id)
        db.add(hotel)
        db.flush()
    return hotel


def get_or_create_room(db, hotel: Hotel, room_number: str) -> Room:
    room = db.query(Room).filter(
        Room.hotel_id == hotel.id,
        Room.room_number == room_number
    ).first()
    if not room:
        room = Room(hotel_id=hotel.id, room_number=room_number)
        db.add(room)
        db.flush()
    return room


def get_or_create_booking(db, room: Room, guest_email: str, guest_name: str) -> Booking:
    booking = db.query(Booking).filter(
        Booking.room_id == room.id,
        Booking.guest_email == guest_email
    ).first()
    if not booking:
        booking = Booking(room_id=room.id, guest_email=guest_email, guest_name=guest_name)
        db.add(booking)
        db.flush()
    return booking


def init_data():
    init_db()
    db = SessionLocal()
    try:
        luxury = get_or_create_hotel_type(db, "Luxury", review_enabled=True)
        budget = get_or_create_hotel_type(db, "Budget", review_enabled=False)

        palace = get_or_create_hotel(db, "Grand Palace Hotel", luxury)
        city_inn = get_or_create_hotel(db, "City Inn", budget)

        room_101 = get_or_create_room(db, palace, "101")
        room_102 = get_or_create_room(db, palace, "102")
        room_201 = get_or_create_room(db, city_inn, "201")

        get_or_create_booking(db, room_101, "guest1@example.com", "Alice")
        get_or_create_booking(db, room_101, "guest2@example.com", "Bob")
        get_or_create_booking(db, room_102, "guest3@example.com", "Carol")
        get_or_create_booking(db, room_201, "guest4@example.com", "Dave")

        db.commit()
        logger.info("Sample data initialized")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init_data()
