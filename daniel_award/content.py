"""
Document de contenu de l'événement (textes de la page, paliers de sponsoring, places individuelles).

- Contenu statique, sans logique: modifier ce fichier pour mettre à jour la page.
- tiers[].vip: 'all' | nombre en chaîne (ex: '4') | '' (aucun)
- tiers[].featured: True => carte pleine largeur en tête de liste
- tiers[].style: 'event' | 'platinum' | 'gold' | 'silver' | 'bronze' (unique par palier)
"""

CONFIG = {
    "hero": {
        "logo_url": "",
        "eyebrow": "Arizona Christian University Presents",
        "edition": "6th",
        "award_name": "Daniel Award",
        "subtitle": "for Courageous Public Faith",
        "honoree_line": "",
        "quote": "",
        "event_date": "",
        "venue_name": "",
        "venue_location": "",
    },
    "honoree": {
        "photo_url": "",
        "first_name": "",
        "last_name": "",
        "role": "",
        "bio": "",
    },
    "award": {
        "title": "About the Daniel Award",
        "description": "",
        "verse": "",
        "verse_ref": "",
    },
    "sponsors_title": "Sponsorship & Seating",
    "sponsors_intro": "Select your sponsorship level to begin registration.",
    "tiers": [
        {
            "name": "Event Sponsor", "price": 50000, "style": "event", "featured": True,
            "tables": 5, "seats": 50, "vip": "all", "books": 50, "host_seats": 10,
            "highlight": "Premier Sponsorship",
            "features": [
                "5 tables of 10 guests (50 seats)",
                "10 host table seats with honored guest",
                "VIP Reception access for all guests",
                "Premier event signage and recognition",
                "50 signed copies of honoree book",
                "Full-page program advertisement",
            ],
        },
        {
            "name": "Platinum Sponsor", "price": 25000, "style": "platinum", "featured": False,
            "tables": 2, "seats": 20, "vip": "8", "books": 20, "host_seats": 4,
            "highlight": "",
            "features": [
                "2 tables of 10 (20 seats)", "4 host table seats",
                "8 VIP Reception passes", "20 signed books", "Half-page program ad",
            ],
        },
        {
            "name": "Gold Sponsor", "price": 15000, "style": "gold", "featured": False,
            "tables": 1, "seats": 10, "vip": "4", "books": 10, "host_seats": 2,
            "highlight": "",
            "features": [
                "1 table of 10 guests", "2 host table seats",
                "4 VIP Reception passes", "10 signed books", "Quarter-page program ad",
            ],
        },
        {
            "name": "Silver Sponsor", "price": 7500, "style": "silver", "featured": False,
            "tables": 1, "seats": 10, "vip": "2", "books": 10, "host_seats": 0,
            "highlight": "",
            "features": [
                "1 table of 10 guests", "2 VIP Reception passes",
                "10 signed books", "Program recognition",
            ],
        },
        {
            "name": "Bronze Sponsor", "price": 2500, "style": "bronze", "featured": False,
            "tables": 0, "seats": 4, "vip": "", "books": 4, "host_seats": 0,
            "highlight": "",
            "features": [
                "4 individual seats", "4 signed books", "Program recognition",
            ],
        },
    ],
    "individual": {
        "price": 250,
        "label": "Individual Seats",
        "tagline": "Join us at this year's celebration",
        "max": 20,
    },
    "host": {
        "description": "with the honoree and university leadership",
        "short": "VIP Reception Included",
    },
    "cta": {
        "title": "Questions About the Daniel Award?",
        "text": "Our advancement team is here to help with sponsorship details, seating arrangements, and event information.",
        "email": "advancement@arizonachristian.edu",
        "phone": "1(602) 489-5300",
        "phone_link": "16024895300",
    },
    "confirmation": {
        "title": "You're Confirmed!",
        "text": "Thank you for your generous support of the Daniel Award. A receipt has been sent to your email. Our advancement team will follow up with event details and guest coordination.",
    },
    "home_url": "https://arizonachristian.edu",
}
