"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/ and services/.
"""

from django.db import models


class Room(models.Model):
    """Persistence model for rooms."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")
    type = models.CharField(max_length=50, blank=True, default="")
    capacity = models.PositiveIntegerField()
    handicap_access = models.BooleanField(default=False)
    maintenance = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Movie(models.Model):
    """Persistence model for movies."""

    title = models.CharField(max_length=255)
    director = models.CharField(max_length=255, blank=True, default="")
    genre = models.CharField(max_length=100, blank=True, default="")
    duration_ms = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title


class Screening(models.Model):
    """Persistence model for screenings."""

    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name="screenings")
    movie = models.ForeignKey(Movie, on_delete=models.PROTECT, related_name="screenings")
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["starts_at", "id"]
        indexes = [
            models.Index(fields=["room", "starts_at"], name="screening_room_start_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(ends_at__gt=models.F("starts_at")),
                name="screening_ends_after_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.movie.title} - {self.room.name} - {self.starts_at}"


class Ticket(models.Model):
    """Persistence model for tickets."""

    class Kind(models.TextChoices):
        CLASSIC = "classic", "Classic"
        SUPER = "super", "Super"

    kind = models.CharField(max_length=10, choices=Kind.choices, default=Kind.CLASSIC)
    screenings = models.ManyToManyField(Screening, related_name="tickets", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.get_kind_display()} ticket #{self.pk}"
