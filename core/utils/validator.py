# core/utils/validator.py
import re

MAX_CITY_LENGTH = 100


def sanitize_user_input(text: str) -> str:
    """Санитизация пользовательского ввода."""
    if not isinstance(text, str):
        raise ValueError("Input must be a string")
    # Разрешаем только буквы, цифры и знаки, встречающиеся в названиях городов
    text = re.sub(r"[^\w\s,\.\-\(\)']", "", text.strip())
    return text[:MAX_CITY_LENGTH]


def normalize_city_name(text: str) -> str:
    """
    Приводит ввод к виду, пригодному для параметра q: без лишних пробелов.
    Пустая строка — в вводе нет названия города.
    """
    city = sanitize_user_input(text)
    return " ".join(city.split())
