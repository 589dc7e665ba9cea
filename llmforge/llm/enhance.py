"""Prompt enhancement: asks the model to rewrite a transformer prompt."""

import logging

from llmforge.core.exceptions import GatewayError
from llmforge.llm.base import Gateway

logger = logging.getLogger(__name__)

ENHANCEMENT_PROMPT = """
You are prompt engineer working for a company which transforms file from one format to another format.

The prompt can have inputs of type text, textArea, file, or folder. The prompt can have multiple inputs.
inputs are defined using placeholders of the form {{{{inputName::inputType}}}}. For example, {{{{content::file}}}}.

Using the provided details: Name: {name}, Description: {description}, and Current Prompt: {prompt},
enhance the given prompt to be more clear, specific, and effective for its intended transformation.
Ensure the improved prompt is concise and includes at least one placeholder like {{{{content::file}}}} for dynamic input replacement.
Do not repeat the provided details in the enhanced prompt. Do not repeat same placeholder multiple times.
By default place the placeholder at the end of the prompt in a new line

Generate an enhanced version of this prompt (reply with only the enhanced prompt - no conversation, explanations, lead-in, bullet points, placeholders, or surrounding quotes):
"""


async def enhance_prompt(gateway: Gateway, name: str, description: str, prompt: str) -> str:
    """Return an improved version of ``prompt`` written by the model.

    Raises:
        GatewayError: If the request fails or the model returns nothing
    """
    request = ENHANCEMENT_PROMPT.format(name=name, description=description, prompt=prompt)
    response = await gateway.send_request(request)
    enhanced = response.strip()
    if not enhanced:
        raise GatewayError("The model returned an empty prompt", context={"name": name})
    logger.info("Prompt enhancement completed")
    return enhanced
