from juveboxd.errors import ValidationError
from juveboxd.schemas import ReviewCreate

COMMENT_MAX_LENGTH = 300
MIN_RATING = 0.5
MAX_RATING = 5.0

EMPTY_NICKNAME = "Por favor, insira seu nome"
RATING_TOO_LOW = "Por favor, selecione pelo menos meia estrela"


def is_half_step(rating: float) -> bool:
    return float(rating * 2).is_integer()


def validate_draft(nickname: str, rating: float, comment: str = "") -> ReviewCreate:
    """Caller-side checks run before any store call.

    Raises ValidationError with the message shown inline next to the form.
    """
    nickname = (nickname or "").strip()
    rating = float(rating)
    if not nickname:
        raise ValidationError(EMPTY_NICKNAME)
    if rating < MIN_RATING:
        raise ValidationError(RATING_TOO_LOW)
    if rating > MAX_RATING or not is_half_step(rating):
        raise ValidationError(f"Invalid rating: {rating}")
    # len() counts code points
    if len(comment or "") > COMMENT_MAX_LENGTH:
        raise ValidationError(f"Comment is limited to {COMMENT_MAX_LENGTH} characters")
    return ReviewCreate(nickname=nickname, rating=rating, comment=comment or "")
