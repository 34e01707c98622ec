"""Seed the default rooms of the cinema."""

import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from screenings.models import Room

logger = logging.getLogger(__name__)

DEFAULT_ROOMS = [
    {
        "name": "Grand Écran",
        "description": "Notre plus grande salle avec écran IMAX et son Dolby Atmos",
        "type": "IMAX",
        "capacity": 30,
        "handicap_access": True,
        "maintenance": True,
    },
    {
        "name": "Studio 1",
        "description": "Salle classique avec sièges confortables et projection 4K",
        "type": "Classique",
        "capacity": 20,
        "handicap_access": True,
        "maintenance": False,
    },
    {
        "name": "Studio 2",
        "description": "Une salle Classique avec un excellent son surround",
        "type": "Classique",
        "capacity": 18,
        "handicap_access": False,
        "maintenance": False,
    },
    {
        "name": "Luxe Lounge",
        "description": "Salle VIP avec fauteuils inclinables et service à la place",
        "type": "VIP",
        "capacity": 15,
        "handicap_access": True,
        "maintenance": True,
    },
    {
        "name": "Expérience 4DX",
        "description": "Vibrations, effets d'eau et de vent pour une immersion totale",
        "type": "4DX",
        "capacity": 22,
        "handicap_access": False,
        "maintenance": True,
    },
    {
        "name": "Cosmos",
        "description": "Salle IMAX dédiée aux documentaires et films spatiaux",
        "type": "IMAX",
        "capacity": 28,
        "handicap_access": True,
        "maintenance": False,
    },
    {
        "name": "Studio 3",
        "description": "Salle classique idéale pour les films d'auteur",
        "type": "Classique",
        "capacity": 19,
        "handicap_access": False,
        "maintenance": False,
    },
    {
        "name": "Évasion",
        "description": "Ambiance intimiste avec sièges en cuir et éclairage tamisé",
        "type": "VIP",
        "capacity": 16,
        "handicap_access": True,
        "maintenance": False,
    },
    {
        "name": "Tornado",
        "description": "Salle 4DX conçue pour les blockbusters d'action",
        "type": "4DX",
        "capacity": 25,
        "handicap_access": False,
        "maintenance": True,
    },
    {
        "name": "Horizon",
        "description": "Salle IMAX à la pointe de la technologie avec écran incurvé",
        "type": "IMAX",
        "capacity": 30,
        "handicap_access": True,
        "maintenance": False,
    },
]


class Command(BaseCommand):
    help = "Create the default rooms, skipping names that already exist."

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for room in DEFAULT_ROOMS:
            _, was_created = Room.objects.get_or_create(
                name=room["name"],
                defaults={key: value for key, value in room.items() if key != "name"},
            )
            created += was_created
        logger.info("Seeded %d room(s)", created)
        self.stdout.write(self.style.SUCCESS(f"{created} rooms have been seeded successfully"))
