from flask import Blueprint, jsonify, request

from devflow.service.user_service import UserService
from devflow.views.request_utils import json_body
from devflow.views.serializers import page_to_dict, question_to_dict, user_to_dict

bp = Blueprint('user', __name__, url_prefix='/user')

user_service = UserService()


@bp.route('/create/', methods=('POST',))
def create():
    data = json_body()
    user = user_service.create_user(
        username=data.get("username"),
        email=data.get("email"),
        name=data.get("name"),
        picture=data.get("picture"),
        bio=data.get("bio"),
    )
    return jsonify({"success": True, "user": user_to_dict(user)}), 201


@bp.route('/detail/<int:user_id>/')
def detail(user_id):
    user = user_service.get_user_by_id(user_id)
    return jsonify({"success": True, "user": user_to_dict(user)})


# bookmarked questions
@bp.route('/saved/<int:user_id>/')
def saved(user_id):
    page = user_service.get_saved_questions(
        user_id,
        search_query=request.args.get('q'),
        filter=request.args.get('filter'),
        page=request.args.get('page', default=1),
        page_size=request.args.get('page_size'),
    )
    return jsonify(page_to_dict(page, question_to_dict, "questions"))
