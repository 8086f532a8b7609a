"""UniBus admin panel package.

Organized by feature modules (students, routes, payments, ...). Each feature
has a thin Flask controller, a service that validates input and owns cache
invalidation, and a repository that talks to the transport REST backend.
"""
