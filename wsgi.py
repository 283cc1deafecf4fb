"""
Web Server Gateway Interface (WSGI) entry point for the objects API stand-in
"""
import os
from objects_api import app

PORT = int(os.getenv("PORT", "8080"))

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT)
