from devflow.models import Answer, Question, Users


def _iso(value):
    return value.isoformat() if value else None


def author_to_dict(user: Users) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "picture": user.picture,
    }


def user_to_dict(user: Users) -> dict:
    data = author_to_dict(user)
    data.update({
        "email": user.email,
        "bio": user.bio,
        "reputation": user.reputation,
        "joined_at": _iso(user.joined_at),
    })
    return data


def question_to_dict(question: Question) -> dict:
    return {
        "id": question.id,
        "title": question.title,
        "content": question.content,
        "author": author_to_dict(question.author),
        "tags": [{"id": t.id, "name": t.name} for t in question.tags],
        "upvotes": len(question.upvoters),
        "downvotes": len(question.downvoters),
        "answers": question.answer_set.count(),
        "views": question.views,
        "created_at": _iso(question.created_at),
    }


def answer_to_dict(answer: Answer) -> dict:
    return {
        "id": answer.id,
        "question_id": answer.question_id,
        "content": answer.content,
        "author": author_to_dict(answer.author),
        "upvotes": len(answer.upvoters),
        "downvotes": len(answer.downvoters),
        "created_at": _iso(answer.created_at),
    }


def vote_to_dict(result) -> dict:
    return {
        "has_upvoted": result.has_upvoted,
        "has_downvoted": result.has_downvoted,
        "voter_delta": result.voter_delta,
        "author_delta": result.author_delta,
    }


def page_to_dict(page, serializer, key: str) -> dict:
    return {
        "success": True,
        key: [serializer(item) for item in page.items],
        "is_next": page.has_next,
        "total": page.total,
        "page": page.page,
        "page_size": page.page_size,
    }
