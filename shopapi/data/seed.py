# shopapi/data/seed.py
from decimal import Decimal

from sqlalchemy import select

from shopapi.data.database import Database
from shopapi.data.models import CategoryModel, ProductModel, UserModel
from shopapi.utils.logging import get_logger
from shopapi.utils.security import hash_password
from shopapi.utils.settings import ADMIN_USERNAME, ADMIN_EMAIL, ADMIN_PASSWORD

logger = get_logger(__name__)

CATEGORIES = [
    ("Electronics", "electronics", "Gadgets, devices, and tech accessories"),
    ("Clothing", "clothing", "Men and women fashion"),
    ("Books", "books", "Fiction, non-fiction, and educational"),
    ("Home & Garden", "home-garden", "Furniture, decor, and garden supplies"),
]

# (nazwa, opis, cena, stan, slug kategorii, obrazek)
PRODUCTS = [
    ("Wireless Headphones", "Premium noise-cancelling over-ear headphones", "129.99", 50, "electronics", "https://placehold.co/400x300?text=Headphones"),
    ("Mechanical Keyboard", "Compact TKL mechanical keyboard with RGB lighting", "89.99", 30, "electronics", "https://placehold.co/400x300?text=Keyboard"),
    ("USB-C Hub", "7-in-1 USB-C hub with HDMI, USB 3.0 and PD charging", "39.99", 100, "electronics", "https://placehold.co/400x300?text=USB+Hub"),
    ("Classic White Tee", "100% organic cotton unisex t-shirt", "24.99", 200, "clothing", "https://placehold.co/400x300?text=T-Shirt"),
    ("Denim Jacket", "Slim-fit blue denim jacket", "59.99", 75, "clothing", "https://placehold.co/400x300?text=Jacket"),
    ("The Art of Code", "A journey through elegant software design patterns", "34.99", 150, "books", "https://placehold.co/400x300?text=Book"),
    ("Clean Architecture", "Practical guide to sustainable software systems", "44.99", 80, "books", "https://placehold.co/400x300?text=Book"),
    ("Bamboo Desk Organizer", "Eco-friendly 5-slot bamboo desk organizer", "19.99", 60, "home-garden", "https://placehold.co/400x300?text=Organizer"),
]


def seed(database: Database) -> None:
    db = database.session()
    try:
        # not forcing: only seed if empty
        if not db.execute(select(CategoryModel.id).limit(1)).first():
            categories = {}
            for name, slug, description in CATEGORIES:
                category = CategoryModel(name=name, slug=slug, description=description)
                db.add(category)
                categories[slug] = category
            db.flush()

            for name, description, price, stock, slug, image_url in PRODUCTS:
                db.add(
                    ProductModel(
                        name=name,
                        description=description,
                        price=Decimal(price),
                        stock=stock,
                        category_id=categories[slug].id,
                        image_url=image_url,
                    )
                )
            db.commit()
            logger.info(f"Seeded {len(CATEGORIES)} categories and {len(PRODUCTS)} products")

        if not db.execute(select(UserModel.id).limit(1)).first():
            db.add(
                UserModel(
                    username=ADMIN_USERNAME,
                    email=ADMIN_EMAIL,
                    password_hash=hash_password(ADMIN_PASSWORD),
                    role="admin",
                )
            )
            db.commit()
            logger.info(f"Seeded admin account {ADMIN_EMAIL}")
    finally:
        db.close()
