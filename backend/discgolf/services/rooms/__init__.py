"""Room domain services: registry, participation, promotion, scores, results.

HTTP routes and socket handlers call into this package; it only talks to
the database session and raises ``discgolf.errors`` exceptions.
"""
