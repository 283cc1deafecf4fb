"""
Global Configuration for the objects API stand-in
"""
import os
import logging

# Get configuration from environment
DATABASE_URI = os.getenv("DATABASE_URI", "sqlite:///:memory:")

# Configure SQLAlchemy
SQLALCHEMY_DATABASE_URI = DATABASE_URI
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Requests answered before the stand-in reports a rate limit (0 = unlimited)
REQUEST_LIMIT = int(os.getenv("REQUEST_LIMIT", "0"))

# Secret for session management
SECRET_KEY = os.getenv("SECRET_KEY", "s3cr3t-key-shhhh")
LOGGING_LEVEL = logging.INFO
