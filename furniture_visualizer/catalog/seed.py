"""
Built-in catalog records loaded at startup.

Five furniture styles and six upholstery materials.
"""

from typing import Dict, List

SEED_RECORDS: List[Dict[str, str]] = [
    # Furniture styles
    {
        "id": "STYLE-001",
        "type": "style",
        "name": "Modern Sectional Sofa",
        "description": "L-shaped contemporary sectional with clean lines",
        "image_url": "https://images.unsplash.com/photo-1555041469-a586c61ea9bc?w=800",
    },
    {
        "id": "STYLE-002",
        "type": "style",
        "name": "Classic Chesterfield Sofa",
        "description": "Traditional tufted sofa with rolled arms",
        "image_url": "https://images.unsplash.com/photo-1493663284031-b7e3aefcae8e?w=800",
    },
    {
        "id": "STYLE-003",
        "type": "style",
        "name": "Mid-Century Armchair",
        "description": "Retro-inspired chair with wooden legs",
        "image_url": "https://images.unsplash.com/photo-1506439773649-6e0eb8cfb237?w=800",
    },
    {
        "id": "STYLE-004",
        "type": "style",
        "name": "Scandinavian Loveseat",
        "description": "Minimalist two-seater with tapered legs",
        "image_url": "https://images.unsplash.com/photo-1550254478-ead40cc54513?w=800",
    },
    {
        "id": "STYLE-005",
        "type": "style",
        "name": "Leather Recliner",
        "description": "Comfortable power recliner with headrest",
        "image_url": "https://images.unsplash.com/photo-1567538096630-e0c55bd6374c?w=800",
    },
    # Materials / fabrics
    {
        "id": "MAT-001",
        "type": "material",
        "name": "Grey Linen Fabric",
        "description": "Natural linen in neutral grey tone",
        "image_url": "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=800",
    },
    {
        "id": "MAT-002",
        "type": "material",
        "name": "Navy Blue Velvet",
        "description": "Rich velvet in deep navy color",
        "image_url": "https://images.unsplash.com/photo-1558171813-4c088753af8f?w=800",
    },
    {
        "id": "MAT-003",
        "type": "material",
        "name": "Cognac Leather",
        "description": "Premium full-grain leather in warm cognac",
        "image_url": "https://images.unsplash.com/photo-1531685250784-7569952593d2?w=800",
    },
    {
        "id": "MAT-004",
        "type": "material",
        "name": "Emerald Green Velvet",
        "description": "Luxurious velvet in jewel-tone green",
        "image_url": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=800",
    },
    {
        "id": "MAT-005",
        "type": "material",
        "name": "Cream Boucle",
        "description": "Textured boucle fabric in soft cream",
        "image_url": "https://images.unsplash.com/photo-1558618047-3c8c76ca7d13?w=800",
    },
    {
        "id": "MAT-006",
        "type": "material",
        "name": "Charcoal Tweed",
        "description": "Classic wool tweed in charcoal grey",
        "image_url": "https://images.unsplash.com/photo-1558171014-33c9310d7bc9?w=800",
    },
]
