"""Prompt construction for extraction requests.

Every request sends the same system instruction and two worked examples
ahead of the live message, so the provider sees what a bare-JSON answer
looks like before it answers for real.
"""

import json

from jinja2 import Environment, StrictUndefined

from .models import Message
from .template import Template, parse_template

SYSTEM_PROMPT = (
    "You are an AI that converts data into the attached JSON format. "
    "You respond with nothing but valid JSON based on the input data. "
    "Your output should DIRECTLY be valid JSON, nothing added before and after. "
    "You will begin with the opening curly brace and end with the closing curly brace. "
    "Only if you absolutely cannot determine a field, use the value null."
)

USER_PROMPT_TEMPLATE = """DATA:
"{{ data }}"

-----------
Expected JSON format:
{{ shape }}

-----------
Valid JSON output in expected format:"""

_environment = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=False)
_user_prompt = _environment.from_string(USER_PROMPT_TEMPLATE)

# Worked examples: (input text, shape description, expected answer)
EXAMPLES: list[tuple[str, dict, dict]] = [
    (
        "The Eiffel Tower, completed in 1889, stands 330 metres tall in Paris. "
        "It is open to visitors every day of the year.",
        {"name": "", "city": "", "year_completed": 0, "height_m": 0, "open_daily": True},
        {
            "name": "Eiffel Tower",
            "city": "Paris",
            "year_completed": 1889,
            "height_m": 330,
            "open_daily": True,
        },
    ),
    (
        "Order #4521 from Maria Lopez: 2x blue notebook, 1x black pen. "
        "Shipping to Lisbon. No phone number provided.",
        {
            "order_id": "",
            "customer": {"name": "", "phone": ""},
            "items": [{"product": "", "quantity": 0}],
        },
        {
            "order_id": "4521",
            "customer": {"name": "Maria Lopez", "phone": None},
            "items": [
                {"product": "blue notebook", "quantity": 2},
                {"product": "black pen", "quantity": 1},
            ],
        },
    ),
]


def render_shape(template: Template) -> str:
    """Render a template as indented JSON with type names as values."""
    return json.dumps(template.describe(), indent=2)


def build_user_prompt(data: str, template: Template) -> str:
    """Render the live user message for ``data`` and ``template``."""
    return _user_prompt.render(data=data, shape=render_shape(template))


def build_messages(data: str, template: Template) -> list[Message]:
    """Build the full ordered message list for one attempt.

    Args:
        data: Unstructured input text
        template: Expected output shape

    Returns:
        System instruction, the worked examples as user/assistant pairs,
        and the live user message, in that order
    """
    messages = [Message(role="system", content=SYSTEM_PROMPT)]

    for example_data, example_shape, example_answer in EXAMPLES:
        messages.append(
            Message(
                role="user",
                content=build_user_prompt(example_data, parse_template(example_shape)),
            )
        )
        messages.append(Message(role="assistant", content=json.dumps(example_answer)))

    messages.append(Message(role="user", content=build_user_prompt(data, template)))
    return messages
