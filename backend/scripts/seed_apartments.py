"""Seed the apartments table with demo listings (replaces existing rows)."""
from __future__ import annotations

import argparse
import logging
from decimal import Decimal
from typing import Dict, List

from sqlalchemy import delete
from sqlalchemy.orm import Session

from homelist.core.logging_setup import setup_logging
from homelist.db.db_connection import SessionLocal
from homelist.models import Apartment

LOGGER = logging.getLogger(__name__)

IMAGE_PARAMS = "auto=format&fit=crop&w=1600&q=80"

UNSPLASH = "https://images.unsplash.com/"
IMG_A = UNSPLASH + "photo-1505691723518-36a5ac3be353"
IMG_B = UNSPLASH + "photo-1505691938895-1758d7feb511"
IMG_C = UNSPLASH + "photo-1580587771525-78b9dba3b914"
IMG_D = UNSPLASH + "photo-1568605114967-8130f3a36994"
IMG_E = UNSPLASH + "photo-1582719478250-c89cae4dc85b"

COUNTRY_BY_CITY = {
    "Cairo": "Egypt", "Giza": "Egypt", "New Cairo": "Egypt", "Alexandria": "Egypt",
    "Dubai": "United Arab Emirates", "Abu Dhabi": "United Arab Emirates",
    "Doha": "Qatar", "Riyadh": "Saudi Arabia",
}

# name, unit, project, bd, ba, price, area, address, city, description, images, amenities
APARTMENTS = [
    ("Sunset View Apartment", "A-1205", "Sunset Residences", 3, 2, 225000, 140, "1205 Palm Street", "Cairo",
     "Spacious apartment with panoramic city views and modern finishes.",
     [IMG_A, IMG_B], ["Pool Access", "Gym Membership", "24/7 Security", "Smart Thermostat"]),
    ("Sunset Corner Suite", "A-1502", "Sunset Residences", 2, 2, 195000, 120, "1502 Palm Street", "Cairo",
     "Corner unit with dual balconies and abundant natural light throughout.",
     [IMG_B, IMG_C], ["Dual Balconies", "Gym Membership", "24/7 Security", "Smart Thermostat"]),
    ("Sunset Family Home", "A-2008", "Sunset Residences", 4, 3, 285000, 180, "2008 Palm Street", "Cairo",
     "Luxurious family home with master suite and spacious living areas.",
     [IMG_D, IMG_E], ["Master Suite", "Pool Access", "Gym Membership", "24/7 Security", "Kids Play Area"]),
    ("Nile Breeze Loft", "B-903", "Nile Towers", 2, 2, 185000, 115, "903 River Lane", "Giza",
     "Open-plan loft with river views and a private terrace.",
     [IMG_C], ["River View", "Private Terrace", "Concierge"]),
    ("Nile Riverside Penthouse", "B-PH15", "Nile Towers", 5, 4, 450000, 350, "PH-15 River Lane", "Giza",
     "Top-floor penthouse with wraparound terrace over the Nile.",
     [IMG_D, IMG_A], ["Private Elevator", "Rooftop Terrace", "Concierge", "Jacuzzi"]),
    ("Nile Studio Plus", "B-501", "Nile Towers", 1, 1, 125000, 75, "501 River Lane", "Giza",
     "Efficient studio with a separate sleeping nook and fitted kitchen.",
     [IMG_B], ["Fitted Kitchen", "Concierge"]),
    ("Gardenia Residence", "C-704", "Green Meadows", 4, 3, 310000, 190, "704 Garden Avenue", "New Cairo",
     "Family residence overlooking landscaped gardens.",
     [IMG_E], ["Garden View", "Clubhouse", "Jogging Track"]),
    ("Gardenia Garden Villa", "C-V12", "Green Meadows", 5, 4, 395000, 280, "Villa 12 Garden Avenue", "New Cairo",
     "Standalone villa with a private garden and pool.",
     [IMG_D], ["Private Pool", "Private Garden", "Clubhouse"]),
    ("Skyline Studio", "D-405", "Downtown Heights", 1, 1, 95000, 65, "405 Center Boulevard", "Alexandria",
     "Compact studio minutes from the corniche.",
     [IMG_A], ["Co-working Lounge", "24/7 Security"]),
    ("Palm Oasis Penthouse", "PH-32", "Palm Oasis Towers", 5, 4, 525000, 320, "32 Tamarisk Road", "Dubai",
     "Penthouse with skyline views and a private plunge pool.",
     [IMG_C, IMG_D], ["Plunge Pool", "Valet Parking", "Spa Access"]),
    ("Palm Oasis Sky Suite", "SS-28", "Palm Oasis Towers", 3, 3, 385000, 200, "28 Tamarisk Road", "Dubai",
     "High-floor suite with floor-to-ceiling windows.",
     [IMG_E], ["Spa Access", "Valet Parking"]),
    ("Palm Oasis Garden Apartment", "GA-05", "Palm Oasis Towers", 2, 2, 245000, 135, "05 Tamarisk Road", "Dubai",
     "Ground-floor apartment opening onto a shared garden.",
     [IMG_B], ["Garden Access", "Kids Play Area"]),
    ("Marina Edge Retreat", "12F", "Marina Edge Residences", 3, 3, 345000, 180, "12 Marina Promenade", "Abu Dhabi",
     "Marina-facing retreat with a wide balcony.",
     [IMG_A], ["Marina View", "Infinity Pool"]),
    ("Marina Edge Waterfront", "WF-08", "Marina Edge Residences", 4, 4, 425000, 240, "08 Marina Promenade", "Abu Dhabi",
     "Waterfront home with direct promenade access.",
     [IMG_C], ["Waterfront", "Infinity Pool", "Private Berth"]),
    ("Lagoon Breeze Duplex", "G-08", "Blue Lagoon Residences", 4, 4, 289000, 210, "8 Lagoon Crescent", "Doha",
     "Two-level duplex over the lagoon.",
     [IMG_E], ["Lagoon View", "Beach Access"]),
    ("Pearl Executive Suite", "804", "Pearl Business Residences", 2, 2, 265000, 130, "804 Pearl Plaza", "Riyadh",
     "Executive suite with integrated office, elegant finishes, and city center accessibility.",
     [IMG_B], ["Business Center", "Concierge"]),
]


def format_image_url(url: str) -> str:
    if not url.startswith("http"):
        return url
    return f"{url}&{IMAGE_PARAMS}" if "?" in url else f"{url}?{IMAGE_PARAMS}"


def build_rows() -> List[Dict]:
    rows = []
    for (name, unit, project, bd, ba, price, area, address, city, desc, images, amenities) in APARTMENTS:
        rows.append(dict(
            name=name, unit_number=unit, project=project,
            bedrooms=bd, bathrooms=ba,
            price=Decimal(price), area=float(area),
            address=address, city=city, country=COUNTRY_BY_CITY[city],
            description=desc,
            images=[format_image_url(u) for u in images],
            amenities=list(amenities),
        ))
    return rows


def seed(db: Session) -> int:
    db.execute(delete(Apartment))
    rows = build_rows()
    for row in rows:
        db.add(Apartment(**row))
    db.commit()
    return len(rows)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()
    setup_logging(args.log_level)

    db = SessionLocal()
    try:
        n = seed(db)
    finally:
        db.close()
    LOGGER.info("Seeded %d apartments.", n)


if __name__ == "__main__":
    main()
