"""Car rental backend package.

Feature modules (cars, branches, users, reservations, rents, revenue) each hold
a model, a repository interface with its MySQL implementation, a service and a
thin Flask controller.
"""
