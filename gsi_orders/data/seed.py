# gsi_orders/data/seed.py
from decimal import Decimal

from sqlalchemy import select

from gsi_orders.data.database import SessionLocal, create_tables
from gsi_orders.data.models import BrandModel, ProductModel, UserModel
from gsi_orders.utils.settings import DEFAULT_USER_ID
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

BRANDS = [
    {
        "name": "Liquid Heaven",
        "slug": "liquidheaven",
        "theme_config": {"primaryColor": "#10b981", "gradient": "from-emerald-500 to-emerald-600"},
        "products": [
            ("CBD Tincture 1000mg", "Full spectrum CBD oil in MCT carrier", "49.99", 120),
            ("Relaxation Gummies", "30 count, 25mg CBD each", "34.99", 80),
            ("Recovery Balm", "Topical balm with menthol and arnica", "29.99", 6),
        ],
    },
    {
        "name": "Motaquila",
        "slug": "motaquila",
        "theme_config": {"primaryColor": "#ec4899", "gradient": "from-pink-500 to-pink-600"},
        "products": [
            ("Agave Spritz", "Sparkling agave drink, 12 pack", "24.99", 200),
            ("Lime Margarita Mix", "Ready to pour margarita mix, 1L", "14.99", 150),
            ("Smoked Paloma", "Grapefruit and smoked salt, 6 pack", "19.99", 0),
        ],
    },
    {
        "name": "Last Genie",
        "slug": "lastgenie",
        "theme_config": {"primaryColor": "#6366f1", "gradient": "from-indigo-500 to-indigo-600"},
        "products": [
            ("Genie Lamp Diffuser", "Ultrasonic aroma diffuser", "59.99", 40),
            ("Wish Candle Set", "Three scented soy candles", "27.50", 9),
            ("Mystic Incense Pack", "Hand rolled incense, 50 sticks", "12.00", 300),
        ],
    },
]


def seed():
    create_tables()
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.execute(select(BrandModel).limit(1)).scalar_one_or_none():
            logger.info("Database already seeded, skipping")
            return

        for data in BRANDS:
            brand = BrandModel(name=data["name"], slug=data["slug"], theme_config=data["theme_config"])
            brand.products = [
                ProductModel(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    inventory_count=inventory,
                    images=[],
                )
                for name, description, price, inventory in data["products"]
            ]
            db.add(brand)

        if DEFAULT_USER_ID and not db.get(UserModel, DEFAULT_USER_ID):
            db.add(
                UserModel(
                    id=DEFAULT_USER_ID,
                    email="test@gsiorders.com",
                    role="customer",
                    full_name="Test User",
                )
            )

        db.commit()
        logger.info(f"Seeded {len(BRANDS)} brands")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
