from __future__ import annotations


def build_flashcard_messages(*, prompt: str, count: int) -> list[dict[str, str]]:
    """
    Create the chat messages for flashcard generation.

    The system message is the output contract (a bare JSON array of
    {question, answer} objects); the user message carries the caller's topic.
    """

    system_prompt = (
        f"You are an expert flashcard generator. Based on the user's request, create {count} "
        "unique flashcards. Each flashcard should have a 'question' and an 'answer'. "
        "The response MUST be a JSON array of objects, where each object has a 'question' "
        "and an 'answer' field. Do not include any other text or formatting. "
        'Example: [{"question": "...", "answer": "..."}, {"question": "...", "answer": "..."}].'
    )
    user_prompt = f"Generate {count} flashcards about: {prompt}"

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
