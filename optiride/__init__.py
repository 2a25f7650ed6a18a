"""Top-level package for OptiRide.

OptiRide compares ride-hailing providers on a trip: it resolves a
pickup and a dropoff, measures the distance between them, estimates
each provider's fare and ETA and builds the links that open the
provider's app pre-filled with the trip.
"""

__version__ = "0.1.0"
