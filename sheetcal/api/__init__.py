"""Event API - FastAPI application serving the weekly schedule

Components:
    main.py: application factory, lifespan and error handlers
    routes/: API route handlers
    models.py: request/response models
"""
