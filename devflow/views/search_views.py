from flask import Blueprint, jsonify, request

from devflow.service.search_service import SearchService

bp = Blueprint("search", __name__, url_prefix="/search")
search_service = SearchService()


# global search box
@bp.route("/")
def global_search():
    results = search_service.global_search(
        query=request.args.get("q", default="", type=str),
        type=request.args.get("type"),
    )
    return jsonify({"success": True, "results": results})
