# catalog.py
# Built-in example tours listed ahead of agency packages on the tours page

from tourmarket.models import Difficulty, Location, TourListing

SHOWCASE_TOURS = [
    {
        'title': 'Explore Ancient Rome',
        'description': 'Walk through the historic streets of Rome, visit the Colosseum, and experience the rich history of the Roman Empire.',
        'price': 199,
        'duration': 3,
        'max_group_size': 15,
        'difficulty': Difficulty.MEDIUM,
        'image': '/static/destinations/rome.webp',
        'address': 'Rome, Italy',
        'coordinates': (12.4964, 41.9028),
        'rating': 4.8,
        'reviews': 124
    },
    {
        'title': 'Paris Discovery Tour',
        'description': 'Experience the magic of Paris with guided tours of the Eiffel Tower, Louvre Museum, and charming Montmartre district.',
        'price': 249,
        'duration': 4,
        'max_group_size': 12,
        'difficulty': Difficulty.EASY,
        'image': '/static/destinations/paris.webp',
        'address': 'Paris, France',
        'coordinates': (2.3522, 48.8566),
        'rating': 4.9,
        'reviews': 89
    },
    {
        'title': 'Tokyo Adventure',
        'description': "Immerse yourself in Japanese culture, visit ancient temples, and explore modern Tokyo's vibrant districts.",
        'price': 299,
        'duration': 5,
        'max_group_size': 10,
        'difficulty': Difficulty.MEDIUM,
        'image': '/static/destinations/tokyo.webp',
        'address': 'Tokyo, Japan',
        'coordinates': (139.6503, 35.6762),
        'rating': 4.7,
        'reviews': 156
    },
]


def showcase_listings():
    """Fresh listing objects for the example tours"""
    return [
        TourListing(
            title=tour['title'],
            description=tour['description'],
            location=Location(tour['address'], tour['coordinates']),
            duration=tour['duration'],
            max_group_size=tour['max_group_size'],
            price=float(tour['price']),
            difficulty=tour['difficulty'],
            images=[tour['image']],
            rating=tour['rating'],
            reviews=tour['reviews']
        )
        for tour in SHOWCASE_TOURS
    ]
