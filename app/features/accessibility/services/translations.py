"""
Localized report text.

English is the source language of every string the service produces (and of
axe-core and the W3C validator). Other languages are lookup tables keyed by
stable ids; anything missing from a table falls back to the English text.
"""
import re
from copy import deepcopy
from typing import Any, Dict, List, Tuple

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "ru")


CATEGORY_NAMES: Dict[str, Dict[str, str]] = {
    "ru": {
        "images": "Изображения и альтернативный текст",
        "contrast": "Цветовой контраст",
        "navigation": "Навигация и фокус",
        "semantics": "Семантика и структура",
        "forms": "Формы и элементы управления",
        "aria": "ARIA атрибуты",
    },
}

CATEGORY_RECOMMENDATIONS: Dict[str, Dict[str, List[str]]] = {
    "ru": {
        "images": [
            "Добавьте атрибут alt ко всем изображениям с описанием их содержания",
            "Для декоративных изображений используйте пустой alt=\"\" или role=\"presentation\"",
            "Убедитесь, что текст в alt кратко и точно описывает изображение",
        ],
        "contrast": [
            "Увеличьте контраст между текстом и фоном до минимум 4.5:1 для обычного текста",
            "Для крупного текста (18pt+ или 14pt+ жирный) требуется контраст минимум 3:1",
            "Используйте инструменты для проверки контраста при выборе цветов",
        ],
        "navigation": [
            "Обеспечьте видимые индикаторы фокуса для всех интерактивных элементов",
            "Избегайте использования положительных значений tabindex",
            "Добавьте ссылку 'Перейти к содержимому' в начале страницы",
            "Проверьте логический порядок навигации с клавиатуры",
        ],
        "semantics": [
            "Используйте правильную иерархию заголовков (h1, h2, h3...)",
            "Добавьте семантические элементы HTML5 (header, main, nav, footer)",
            "Убедитесь, что страница имеет атрибут lang в теге <html>",
            "Используйте списки (<ul>, <ol>) для группировки связанных элементов",
        ],
        "forms": [
            "Свяжите каждое поле формы с меткой <label>",
            "Добавьте описательный текст или aria-label для всех кнопок",
            "Используйте placeholder только как подсказку, не заменяйте им метку",
            "Группируйте связанные поля с помощью <fieldset> и <legend>",
        ],
        "aria": [
            "Используйте нативные HTML элементы вместо ARIA, где возможно",
            "Убедитесь, что ARIA атрибуты применяются корректно",
            "Проверьте, что все обязательные ARIA атрибуты присутствуют",
            "Избегайте конфликтов между ARIA и нативной семантикой HTML",
        ],
    },
}

OVERALL_RECOMMENDATIONS: Dict[str, Dict[str, str]] = {
    "ru": {
        "priority": "Приоритет 1: Исправьте критические и серьёзные ошибки - они существенно влияют на доступность сайта",
        "html_errors": "Исправьте ошибки HTML валидации - невалидный HTML может вызывать проблемы с программами чтения с экрана",
        "zoom": "Разрешите масштабирование страницы - это критично для пользователей с ограниченным зрением",
        "autoplay": "Удалите автовоспроизведение медиа или добавьте элементы управления",
        "component_library": "Рассмотрите возможность использования библиотек UI компонентов с встроенной поддержкой доступности",
        "screen_reader_testing": "После исправления проведите тестирование с программами чтения с экрана (NVDA, JAWS)",
        "user_testing": "Привлеките реальных пользователей с ограниченными возможностями для тестирования",
    },
}

# axe-core rule id -> localized help / description
RULE_TEXT: Dict[str, Dict[str, Dict[str, str]]] = {
    "ru": {
        "color-contrast": {
            "help": "Элементы должны иметь достаточный цветовой контраст",
            "description": "Убедитесь, что контрастность между текстом переднего плана и фоном соответствует требованиям WCAG AA (минимум 4.5:1 для обычного текста)",
        },
        "image-alt": {
            "help": "Изображения должны иметь альтернативный текст",
            "description": "Убедитесь, что элементы <img> имеют атрибут alt или role=\"presentation\" для декоративных изображений",
        },
        "label": {
            "help": "Элементы форм должны иметь метки",
            "description": "Убедитесь, что каждое поле формы имеет связанную метку <label>",
        },
        "button-name": {
            "help": "Кнопки должны иметь различимый текст",
            "description": "Убедитесь, что элементы <button> имеют текстовое содержимое или aria-label",
        },
        "link-name": {
            "help": "Ссылки должны иметь различимый текст",
            "description": "Убедитесь, что каждая ссылка имеет текст, описывающий её назначение",
        },
        "heading-order": {
            "help": "Уровни заголовков должны увеличиваться последовательно",
            "description": "Убедитесь, что порядок заголовков семантически правильный (h1, h2, h3 и т.д.)",
        },
        "html-has-lang": {
            "help": "Элемент <html> должен иметь атрибут lang",
            "description": "Убедитесь, что в элементе <html> указан атрибут lang с допустимым значением",
        },
        "page-has-heading-one": {
            "help": "Страница должна содержать заголовок первого уровня",
            "description": "Убедитесь, что страница содержит хотя бы один заголовок <h1>",
        },
        "landmark-one-main": {
            "help": "Страница должна содержать один основной элемент-ориентир",
            "description": "Убедитесь, что на странице есть один элемент <main> или role=\"main\"",
        },
        "region": {
            "help": "Весь контент страницы должен находиться в семантических областях",
            "description": "Убедитесь, что весь контент страницы находится внутри семантических элементов-ориентиров",
        },
        "bypass": {
            "help": "Страница должна иметь возможность пропустить повторяющиеся блоки",
            "description": "Убедитесь, что есть ссылка для пропуска повторяющегося контента или правильная структура заголовков",
        },
        "tabindex": {
            "help": "Элементы не должны иметь tabindex больше нуля",
            "description": "Убедитесь, что не используется положительное значение tabindex",
        },
        "aria-allowed-attr": {
            "help": "Элементы должны использовать только разрешённые ARIA-атрибуты",
            "description": "Убедитесь, что ARIA-атрибуты применяются только к элементам, которые их поддерживают",
        },
        "aria-required-attr": {
            "help": "Элементы с ARIA-ролями должны иметь обязательные атрибуты",
            "description": "Убедитесь, что элементы с ARIA-ролями имеют все обязательные ARIA-атрибуты",
        },
        "aria-valid-attr-value": {
            "help": "ARIA-атрибуты должны иметь допустимые значения",
            "description": "Убедитесь, что значения ARIA-атрибутов соответствуют требованиям спецификации",
        },
        "aria-roles": {
            "help": "ARIA-роли должны быть допустимыми",
            "description": "Убедитесь, что используемые значения role соответствуют спецификации ARIA",
        },
        "input-image-alt": {
            "help": "Кнопки-изображения должны иметь альтернативный текст",
            "description": "Убедитесь, что <input type=\"image\"> имеет атрибут alt",
        },
        "list": {
            "help": "Элементы списка должны находиться внутри <ul>, <ol> или <dl>",
            "description": "Убедитесь, что <li> используется только внутри <ul>, <ol> или <dl>",
        },
        "meta-viewport": {
            "help": "Масштабирование не должно быть запрещено",
            "description": "Убедитесь, что meta viewport не запрещает масштабирование (user-scalable=no)",
        },
        "meta-refresh": {
            "help": "Страница не должна автоматически обновляться",
            "description": "Убедитесь, что не используется meta refresh для автоматического обновления или перенаправления",
        },
        "duplicate-id": {
            "help": "Значения id должны быть уникальными",
            "description": "Убедитесь, что каждый атрибут id имеет уникальное значение на странице",
        },
        "select-name": {
            "help": "Элементы select должны иметь доступное имя",
            "description": "Убедитесь, что элементы <select> имеют связанную метку или aria-label",
        },
        "valid-lang": {
            "help": "Атрибут lang должен иметь допустимое значение",
            "description": "Убедитесь, что значение атрибута lang соответствует стандарту BCP 47",
        },
        "document-title": {
            "help": "Документ должен иметь заголовок",
            "description": "Убедитесь, что страница имеет элемент <title>",
        },
        "frame-title": {
            "help": "Фреймы должны иметь заголовок",
            "description": "Убедитесь, что элементы <iframe> и <frame> имеют атрибут title",
        },
    },
}

FAILURE_PHRASES: Dict[str, List[Tuple[str, str]]] = {
    "ru": [
        ("Element does not have text that is visible to screen readers", "Элемент не содержит текст, видимый программам чтения с экрана"),
        ("Element has no title attribute", "Элемент не имеет атрибута title"),
        ("aria-label attribute does not exist or is empty", "Атрибут aria-label отсутствует или пуст"),
        ("Element has insufficient color contrast", "Элемент имеет недостаточный цветовой контраст"),
        ("Fix any of the following", "Исправьте любое из следующего"),
        ("Fix all of the following", "Исправьте все следующее"),
        ("Element does not have an alt attribute", "Элемент не имеет атрибута alt"),
        ("aria-label attribute does not exist", "Атрибут aria-label отсутствует"),
        ("Form element does not have an implicit (wrapped) <label>", "Элемент формы не имеет неявной метки <label>"),
        ("Form element does not have an explicit <label>", "Элемент формы не имеет явной метки <label>"),
        ("aria-labelledby attribute does not exist", "Атрибут aria-labelledby отсутствует"),
        ("Element has no accessible name", "Элемент не имеет доступного имени"),
    ],
}

HTML_VALIDATION_PHRASES: Dict[str, List[Tuple[str, str]]] = {
    "ru": [
        ("Bad value", "Недопустимое значение"),
        ("Stray end tag", "Лишний закрывающий тег"),
        ("End tag", "Закрывающий тег"),
        ("Start tag", "Открывающий тег"),
        ("not allowed on element", "не разрешён для элемента"),
        ("not allowed", "не разрешён"),
        ("is missing", "отсутствует"),
        ("must not be empty", "не должен быть пустым"),
        ("No space between attributes", "Нет пробела между атрибутами"),
        ("Duplicate attribute", "Дублирующийся атрибут"),
        ("Duplicate ID", "Дублирующийся ID"),
        ("Consider using", "Рассмотрите использование"),
        ("in this context", "в этом контексте"),
        ("at this point", "в этом месте"),
        ("element must have an", "элемент должен иметь"),
        ("attribute is unnecessary", "атрибут не требуется"),
        ("Self-closing syntax", "Синтаксис самозакрывающегося тега"),
        ("on a non-void HTML element", "для неодиночного HTML элемента"),
        ("Unclosed element", "Незакрытый элемент"),
        ("Unexpected end tag", "Неожиданный закрывающий тег"),
        ("Missing end tag", "Отсутствует закрывающий тег"),
        ("Element", "Элемент"),
        ("Attribute", "Атрибут"),
    ],
}


def category_name(key: str, default: str, lang: str) -> str:
    return CATEGORY_NAMES.get(lang, {}).get(key, default)


def category_recommendations(key: str, default: List[str], lang: str) -> List[str]:
    return list(CATEGORY_RECOMMENDATIONS.get(lang, {}).get(key, default))


def overall_recommendation(key: str, default: str, lang: str) -> str:
    return OVERALL_RECOMMENDATIONS.get(lang, {}).get(key, default)


def translate_violation_help(rule_id: str, original_help: str, lang: str) -> str:
    return RULE_TEXT.get(lang, {}).get(rule_id, {}).get("help") or original_help


def translate_violation_description(rule_id: str, original_description: str, lang: str) -> str:
    return RULE_TEXT.get(lang, {}).get(rule_id, {}).get("description") or original_description


def _replace_phrases(text: str, phrases: List[Tuple[str, str]]) -> str:
    # Longest phrases first so "Stray end tag" wins over "End tag"
    for english, localized in sorted(phrases, key=lambda p: len(p[0]), reverse=True):
        text = re.sub(re.escape(english), localized, text, flags=re.IGNORECASE)
    return text


def translate_failure_summary(failure_summary: str, lang: str) -> str:
    return _replace_phrases(failure_summary, FAILURE_PHRASES.get(lang, []))


def translate_html_validation_message(message: str, lang: str) -> str:
    return _replace_phrases(message, HTML_VALIDATION_PHRASES.get(lang, []))


def localize_check(check: Dict[str, Any], lang: str) -> Dict[str, Any]:
    """
    Copy of a serialized check with rule engine and validator text localized.

    Rule ids, selectors, HTML snippets and counts are never touched.
    """
    if lang == DEFAULT_LANGUAGE:
        return check

    localized = deepcopy(check)

    for violation in localized.get("violations") or []:
        rule_id = violation.get("id", "")
        violation["help"] = translate_violation_help(rule_id, violation.get("help", ""), lang)
        violation["description"] = translate_violation_description(
            rule_id, violation.get("description", ""), lang
        )
        for node in violation.get("nodes") or []:
            if node.get("failureSummary"):
                node["failureSummary"] = translate_failure_summary(node["failureSummary"], lang)

    for message in localized.get("html_validation_messages") or []:
        if message.get("message"):
            message["message"] = translate_html_validation_message(message["message"], lang)

    return localized
