######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################

"""
Models for the objects API stand-in

An object is a name plus a free-form ``data`` mapping, addressed by an
opaque string id, matching the restful-api.dev ``/objects`` resource.
"""

import logging
import uuid
from typing import List, Optional

from flask_sqlalchemy import SQLAlchemy

logger = logging.getLogger("flask.app")

# SQLAlchemy handle; bound to the app in objects_api/__init__.py
db = SQLAlchemy()


class DataValidationError(Exception):
    """Used for data validation errors when deserializing or updating."""


class DatabaseError(Exception):
    """Used for database operation failures (commit/connection/constraint errors)."""


class RequestQuota:
    """Counts requests and reports when the configured limit is spent."""

    def __init__(self, limit: int = 0):
        self.limit = limit
        self.used = 0

    def consume(self) -> bool:
        """Count one request; False once the limit is exceeded (0 = unlimited)."""
        self.used += 1
        return self.limit <= 0 or self.used <= self.limit

    def reset(self, limit: Optional[int] = None):
        """Start counting again, optionally with a new limit."""
        self.used = 0
        if limit is not None:
            self.limit = limit


class ApiObject(db.Model):
    """
    Class that represents an Object
    """

    ##################################################
    # Table Schema
    ##################################################
    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    data = db.Column(db.JSON, nullable=True)
    # Auditing fields
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    last_updated = db.Column(
        db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False
    )

    ##################################################
    # INSTANCE METHODS
    ##################################################

    def __repr__(self):
        return f"<ApiObject {self.name} id=[{self.id}]>"

    def create(self):
        """Creates this Object in the database with a fresh id."""
        logger.info("Creating %s", self.name)
        self.id = uuid.uuid4().hex
        try:
            db.session.add(self)
            db.session.commit()
        except Exception as e:  # pragma: no cover - exercised via exception tests
            db.session.rollback()
            logger.error("Error creating record: %s", self)
            raise DatabaseError(e) from e

    def update(self):
        """Updates this Object in the database."""
        logger.info("Saving %s", self.name)
        if not self.id:
            raise DataValidationError("Field 'id' is required for update")
        try:
            db.session.commit()
        except Exception as e:  # pragma: no cover - exercised via exception tests
            db.session.rollback()
            logger.error("Error updating record: %s", self)
            raise DatabaseError(e) from e

    def delete(self):
        """Removes this Object from the data store."""
        logger.info("Deleting %s", self.name)
        try:
            db.session.delete(self)
            db.session.commit()
        except Exception as e:  # pragma: no cover - exercised via exception tests
            db.session.rollback()
            logger.error("Error deleting record: %s", self)
            raise DatabaseError(e) from e

    def serialize(self) -> dict:
        """Serializes an Object into a dictionary."""
        return {"id": self.id, "name": self.name, "data": self.data}

    def deserialize(self, data: dict):
        """
        Deserializes an Object from a dictionary (full replacement).

        Args:
            data (dict): a dictionary containing ``name`` and optional ``data``
        """
        if not isinstance(data, dict):
            raise DataValidationError(
                "Invalid object: request body contained malformed or invalid data"
            )
        try:
            name = data["name"]
        except KeyError as error:
            raise DataValidationError(f"Invalid object: missing '{error.args[0]}'") from error
        if not isinstance(name, str) or not name.strip():
            raise DataValidationError("Field 'name' must be a non-empty string")
        self.name = name
        self.data = self._valid_data(data.get("data"))
        return self

    def merge(self, data: dict):
        """
        Applies a partial update: ``name`` replaces, ``data`` keys are merged.
        """
        if not isinstance(data, dict):
            raise DataValidationError(
                "Invalid object: request body contained malformed or invalid data"
            )
        if "name" in data:
            if not isinstance(data["name"], str) or not data["name"].strip():
                raise DataValidationError("Field 'name' must be a non-empty string")
            self.name = data["name"]
        if "data" in data:
            delta = self._valid_data(data["data"]) or {}
            # assign a new dict so SQLAlchemy sees the change
            self.data = {**(self.data or {}), **delta}
        return self

    @staticmethod
    def _valid_data(value):
        if value is not None and not isinstance(value, dict):
            raise DataValidationError("Field 'data' must be an object")
        return value

    ##################################################
    # CLASS METHODS
    ##################################################

    @classmethod
    def all(cls) -> List["ApiObject"]:
        """Returns all Objects in the database (as a list)."""
        logger.info("Processing all Objects")
        return list(cls.query.order_by(cls.created_at).all())

    @classmethod
    def find(cls, by_id: str) -> Optional["ApiObject"]:
        """Finds an Object by its id (single object or None)."""
        logger.info("Processing lookup for id %s ...", by_id)
        return cls.query.session.get(cls, str(by_id))
