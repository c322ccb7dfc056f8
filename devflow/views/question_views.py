from flask import Blueprint, jsonify, request

from devflow.models import VoteDirection
from devflow.service.qna_service import QnaService
from devflow.service.user_service import UserService
from devflow.views.request_utils import json_body, optional_json_body, user_id_from
from devflow.views.serializers import page_to_dict, question_to_dict, vote_to_dict

bp = Blueprint('question', __name__, url_prefix='/question')

qna_service = QnaService()
user_service = UserService()


# question list
@bp.route('/list/')
def _list():
    page = qna_service.get_questions(
        search_query=request.args.get('q'),
        filter=request.args.get('filter'),
        page=request.args.get('page', default=1),
        page_size=request.args.get('page_size'),
    )
    return jsonify(page_to_dict(page, question_to_dict, "questions"))


@bp.route('/hot/')
def hot():
    questions = qna_service.get_hot_questions()
    return jsonify({"success": True, "questions": [question_to_dict(q) for q in questions]})


# question detail
@bp.route('/detail/<int:question_id>/')
def detail(question_id):
    question = qna_service.get_question_by_id(question_id)
    data = {"success": True, "question": question_to_dict(question)}

    viewer_id = request.args.get('user_id', type=int)
    if viewer_id is not None:
        state = qna_service.question_vote_state(question_id, viewer_id)
        data["has_upvoted"] = state is VoteDirection.UP
        data["has_downvoted"] = state is VoteDirection.DOWN
    return jsonify(data)


@bp.route('/create/', methods=('POST',))
def create():
    data = json_body()
    question = qna_service.create_question(
        title=data.get("title"),
        content=data.get("content"),
        tags=data.get("tags"),
        author_id=user_id_from(data),
        path=data.get("path"),
    )
    return jsonify({"success": True, "question": question_to_dict(question)}), 201


@bp.route('/modify/<int:question_id>/', methods=('POST',))
def modify(question_id):
    data = json_body()
    question = qna_service.edit_question(
        question_id,
        title=data.get("title"),
        content=data.get("content"),
        path=data.get("path"),
    )
    return jsonify({"success": True, "question": question_to_dict(question)})


@bp.route('/delete/<int:question_id>/', methods=('POST',))
def delete(question_id):
    data = optional_json_body()
    qna_service.delete_question(question_id, path=data.get("path"))
    return jsonify({"success": True})


@bp.route('/vote/<int:question_id>/', methods=('POST',))
def vote(question_id):
    data = json_body()
    result = qna_service.vote_question(
        question_id,
        user_id=user_id_from(data),
        direction=data.get("direction"),
        has_upvoted=data.get("has_upvoted"),
        has_downvoted=data.get("has_downvoted"),
        path=data.get("path"),
    )
    return jsonify({"success": True, **vote_to_dict(result)})


@bp.route('/save/<int:question_id>/', methods=('POST',))
def save(question_id):
    data = json_body()
    saved = user_service.toggle_save_question(user_id_from(data), question_id, path=data.get("path"))
    return jsonify({"success": True, "saved": saved})


@bp.route('/view/<int:question_id>/', methods=('POST',))
def view(question_id):
    data = optional_json_body()
    qna_service.view_question(question_id, user_id=user_id_from(data, required=False))
    return jsonify({"success": True})
