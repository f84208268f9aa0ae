"""Users app package.

Defines the custom user model (email login, member/admin role) and the
JWT registration and login endpoints. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
