# Package initializer for the meeting room event board.

"""
The `eventboard` package contains all modules for the OfficeRnD event board.

Modules:

- ``config``: application settings loaded from environment variables.
- ``models``: Pydantic records for OfficeRnD data and API responses.
- ``exceptions``: errors raised while fetching and classifying bookings.
- ``aggregator``: joins floors, rooms, teams and members into bookings.
- ``events``: time based filtering of the day's bookings.
- ``cache``: a small TTL cache used by the API client.
- ``officernd_client``: helpers for interacting with the OfficeRnD API.
- ``cards``: turns bookings into display cards.
- ``main``: the FastAPI application definition.

"""
