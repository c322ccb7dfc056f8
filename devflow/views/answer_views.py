from flask import Blueprint, jsonify, request

from devflow.service.qna_service import QnaService
from devflow.views.request_utils import json_body, optional_json_body, user_id_from
from devflow.views.serializers import answer_to_dict, page_to_dict, vote_to_dict

bp = Blueprint('answer', __name__, url_prefix='/answer')

qna_service = QnaService()


@bp.route('/list/<int:question_id>/')
def _list(question_id):
    page = qna_service.get_answers(
        question_id,
        sort_by=request.args.get('sort'),
        page=request.args.get('page', default=1),
        page_size=request.args.get('page_size'),
    )
    return jsonify(page_to_dict(page, answer_to_dict, "answers"))


@bp.route('/create/<int:question_id>/', methods=('POST',))
def create(question_id):
    data = json_body()
    answer = qna_service.create_answer(
        content=data.get("content"),
        author_id=user_id_from(data),
        question_id=question_id,
        path=data.get("path"),
    )
    return jsonify({"success": True, "answer": answer_to_dict(answer)}), 201


@bp.route('/vote/<int:answer_id>/', methods=('POST',))
def vote(answer_id):
    data = json_body()
    result = qna_service.vote_answer(
        answer_id,
        user_id=user_id_from(data),
        direction=data.get("direction"),
        has_upvoted=data.get("has_upvoted"),
        has_downvoted=data.get("has_downvoted"),
        path=data.get("path"),
    )
    return jsonify({"success": True, **vote_to_dict(result)})


@bp.route('/delete/<int:answer_id>/', methods=('POST',))
def delete(answer_id):
    data = optional_json_body()
    qna_service.delete_answer(answer_id, path=data.get("path"))
    return jsonify({"success": True})
