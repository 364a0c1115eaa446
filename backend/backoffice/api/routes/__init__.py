"""HTTP routes. Every router here is mounted by ``main.create_app()``."""
