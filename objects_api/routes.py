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
Objects API stand-in

Implements the restful-api.dev ``/objects`` resource (Create, Read, Update,
Patch, Delete and List) plus its daily request limit, so the suite can run
its REST scenarios offline and exercise the rate-limit fallback.
"""

# Standard library
from datetime import datetime, timezone

# Third-party
from flask import abort, current_app as app, jsonify, request, url_for

# First-party
from objects_api.common import status  # HTTP status codes
from objects_api.models import ApiObject, DataValidationError, RequestQuota

quota = RequestQuota(app.config.get("REQUEST_LIMIT", 0))


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


######################################################################
# Request limit (answered before routing, like the real API)
######################################################################
@app.before_request
def enforce_request_limit():
    """Answer 405 with a limit error once the quota is spent."""
    if not request.path.startswith("/objects"):
        return None
    if quota.consume():
        return None
    app.logger.warning("Request limit of %s reached", quota.limit)
    return (
        jsonify(
            error=(
                f"You have reached your request limit of {quota.limit} requests. "
                "Please try again later."
            )
        ),
        status.HTTP_405_METHOD_NOT_ALLOWED,
    )


######################################################################
# Root endpoint
######################################################################
@app.route("/", methods=["GET"])
def index():
    """Root URL response"""
    return (
        jsonify(
            name="Objects API Stand-in",
            version="1.0.0",
            paths={"objects": "/objects"},
        ),
        status.HTTP_200_OK,
    )


######################################################################
# LIST Objects
######################################################################
@app.route("/objects", methods=["GET"])
def list_objects():
    """List all Objects"""
    app.logger.info("Request to list Objects")
    objects = ApiObject.all()
    return jsonify([o.serialize() for o in objects]), status.HTTP_200_OK


######################################################################
# READ an Object
######################################################################
@app.route("/objects/<string:object_id>", methods=["GET"])
def get_object(object_id: str):
    """Get an Object by id"""
    app.logger.info("Request to get Object with id [%s]", object_id)
    obj = _find_or_404(object_id)
    return jsonify(obj.serialize()), status.HTTP_200_OK


######################################################################
# CREATE an Object
######################################################################
@app.route("/objects", methods=["POST"])
def create_object():
    """Create an Object"""
    app.logger.info("Request to Create an Object")
    check_content_type("application/json")

    obj = ApiObject()
    try:
        data = request.get_json()
        app.logger.info("Processing: %s", data)
        obj.deserialize(data)
        obj.create()
    except DataValidationError as error:
        abort(status.HTTP_400_BAD_REQUEST, str(error))

    location_url = url_for("get_object", object_id=obj.id, _external=True)
    return (
        jsonify({**obj.serialize(), "createdAt": _timestamp()}),
        status.HTTP_200_OK,
        {"Location": location_url},
    )


######################################################################
# UPDATE an Object
######################################################################
@app.route("/objects/<string:object_id>", methods=["PUT"])
def update_object(object_id: str):
    """Replace the name and data of an Object"""
    app.logger.info("Request to update Object with id [%s]", object_id)
    check_content_type("application/json")
    obj = _find_or_404(object_id)

    try:
        data = request.get_json()
        app.logger.info("Processing: %s", data)
        obj.deserialize(data)
        obj.update()
    except DataValidationError as error:
        abort(status.HTTP_400_BAD_REQUEST, str(error))

    return jsonify({**obj.serialize(), "updatedAt": _timestamp()}), status.HTTP_200_OK


######################################################################
# PATCH an Object
######################################################################
@app.route("/objects/<string:object_id>", methods=["PATCH"])
def patch_object(object_id: str):
    """Partially update an Object; data keys are merged"""
    app.logger.info("Request to patch Object with id [%s]", object_id)
    check_content_type("application/json")
    obj = _find_or_404(object_id)

    try:
        data = request.get_json()
        app.logger.info("Processing: %s", data)
        obj.merge(data)
        obj.update()
    except DataValidationError as error:
        abort(status.HTTP_400_BAD_REQUEST, str(error))

    return jsonify({**obj.serialize(), "updatedAt": _timestamp()}), status.HTTP_200_OK


######################################################################
# DELETE an Object
######################################################################
@app.route("/objects/<string:object_id>", methods=["DELETE"])
def delete_object(object_id: str):
    """Delete an Object by id (404 when it does not exist)"""
    app.logger.info("Request to delete Object with id [%s]", object_id)
    obj = _find_or_404(object_id)
    obj.delete()
    return (
        jsonify(message=f"Object with id = {object_id} has been deleted."),
        status.HTTP_200_OK,
    )


######################################################################
# Utilities
######################################################################
def _find_or_404(object_id: str) -> ApiObject:
    obj = ApiObject.find(object_id)
    if not obj:
        abort(status.HTTP_404_NOT_FOUND, f"Object with id={object_id} was not found.")
    return obj


def check_content_type(content_type: str):
    """Checks that the media type is correct (tolerates charset etc.)"""
    if request.mimetype != content_type:
        got = request.content_type or "none"
        abort(
            status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            f"Content-Type must be {content_type}; received {got}",
        )


######################################################################
# Endpoint: /health
######################################################################
@app.route("/health", methods=["GET"])
def health():
    """Health check; independent of the database and the request limit"""
    app.logger.info("Health check requested")
    return jsonify(status="OK"), status.HTTP_200_OK
