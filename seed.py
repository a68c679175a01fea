"""
Seed demo content

    python seed.py       replace content with the demo set
    python seed.py -d    delete the demo collections only
"""
import sys
import logging
import argparse

from pymongo.database import Database

from auth import hash_password
from database import create_document, db

logger = logging.getLogger(__name__)

COLLECTIONS = ["user", "resume", "service", "project", "category", "testimonial"]

ADMIN = {"name": "Admin User", "email": "admin@example.com", "password": "password123", "role": "admin"}

SERVICES = [
    {
        "title": "Graphic Design",
        "description": "Creative designs for Social Media, Posters, and wide-ranging Marketing Creatives that capture attention.",
        "icon": "ux",
        "price": 100,
    },
    {
        "title": "Branding & Identity",
        "description": "Complete Brand Systems, Logos, and Guidelines to establish a strong and memorable market presence.",
        "icon": "system",
        "price": 150,
    },
    {
        "title": "Motion Graphics & Video",
        "description": "High-quality video production and motion graphics that bring your stories to life.",
        "icon": "web",
        "price": 120,
    },
    {
        "title": "Content & Voice Over",
        "description": "Professional Content Writing and Voice Over Production to convey your message clearly.",
        "icon": "wireframe",
        "price": 50,
    },
]

RESUME = [
    {
        "title": "Senior Creative Visual Producer",
        "organization": "Deero Advert",
        "duration": "2021 - Present",
        "description": "Leading creative visual production and managing branding & video projects. Overseeing a team of designers and editors to deliver high-quality content.",
        "type": "experience",
        "order": 1,
    },
    {
        "title": "CEO & Founder",
        "organization": "Guhaad Creatives & Advertisement Agency",
        "duration": "2019 - Present",
        "description": "Founded and currently managing a creative agency focused on digital marketing, branding, and multimedia production.",
        "type": "experience",
        "order": 2,
    },
    {
        "title": "Multimedia Specialist",
        "organization": "Freelance",
        "duration": "2018 - 2020",
        "description": "Worked with multiple clients to produce engaging video content, motion graphics, and comprehensive brand identity packages.",
        "type": "experience",
        "order": 3,
    },
    {
        "title": "Bachelor of Multimedia Arts",
        "organization": "University of Creative Arts",
        "duration": "2015 - 2019",
        "description": "Specialized in visual communication, digital media, and interactive design.",
        "type": "education",
        "order": 1,
    },
    {
        "title": "Certified Digital Marketer",
        "organization": "Google Digital Garage",
        "duration": "2020",
        "description": "Comprehensive certification in online marketing strategies, SEO, and analytics.",
        "type": "education",
        "order": 2,
    },
]

TESTIMONIALS = [
    {
        "name": "John Doe",
        "position": "Marketing Manager",
        "message": "Working with Guhaad was a game changer for our brand. The visual identity they created is stunning.",
        "rating": 5,
        "image": "https://images.unsplash.com/photo-1599566150163-29194dcaad36?w=100&auto=format&fit=crop&q=60",
    },
]


def destroy(database: Database):
    for name in COLLECTIONS:
        database[name].delete_many({})


def seed(database: Database) -> dict:
    destroy(database)

    for s in SERVICES:
        create_document(database, "service", {"features": [], **s})
    for r in RESUME:
        create_document(database, "resume", r)

    web = create_document(database, "category", {"name": "Web Design", "color": "#ff014f", "description": None})
    graphic = create_document(database, "category", {"name": "Graphic Design", "color": "#3b82f6", "description": None})

    projects = [
        {
            "title": "Inbio Portfolio Design",
            "description": "A premium portfolio design with neumorphic style.",
            "image": "https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=800&auto=format&fit=crop&q=60",
            "category": web,
            "likes": 120,
        },
        {
            "title": "Brand Motion Graphics",
            "description": "Dynamic motion graphics for a tech startup branding.",
            "image": "https://images.unsplash.com/photo-1551434678-e076c223a692?w=800&auto=format&fit=crop&q=60",
            "category": graphic,
            "likes": 85,
        },
    ]
    for p in projects:
        create_document(database, "project", {
            "link": None, "technologies": [], "gallery": [], "project_type": "image", **p,
        })

    for t in TESTIMONIALS:
        create_document(database, "testimonial", t)

    create_document(database, "user", {
        "name": ADMIN["name"],
        "email": ADMIN["email"],
        "password": hash_password(ADMIN["password"]),
        "role": ADMIN["role"],
        "is_active": True,
    })

    return {
        "services": len(SERVICES),
        "resume": len(RESUME),
        "categories": 2,
        "projects": len(projects),
        "testimonials": len(TESTIMONIALS),
        "users": 1,
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the portfolio database with demo content")
    parser.add_argument("-d", "--destroy", action="store_true", help="delete demo collections without re-seeding")
    args = parser.parse_args(argv)

    if db is None:
        logger.error("DATABASE_URL is not set")
        return 1
    if args.destroy:
        destroy(db)
        logger.info("Data destroyed")
        return 0
    counts = seed(db)
    logger.info("Data imported: %s", counts)
    logger.info("Admin user created: %s / %s", ADMIN["email"], ADMIN["password"])
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    sys.exit(main())
