from enum import Enum


class Audience(str, Enum):
    SCIENTISTS_RESEARCHERS = "scientists_researchers"
    STUDENTS_ACADEMICS = "students_academics"
    INDUSTRY_PROFESSIONALS = "industry_professionals"
    JOURNALISTS_MEDIA = "journalists_media"
    GENERAL_PUBLIC = "general_public"


AUDIENCE_PHRASES = {
    Audience.SCIENTISTS_RESEARCHERS: "scientists and researchers",
    Audience.STUDENTS_ACADEMICS: "students and academics",
    Audience.INDUSTRY_PROFESSIONALS: "industry professionals",
    Audience.JOURNALISTS_MEDIA: "journalists and media professionals",
    Audience.GENERAL_PUBLIC: "the general public (non-expert audience)",
}

SIMPLIFY_INSTRUCTIONS = (
    "Do not write very long sentences. "
    "The language of the simplified text should match the language of the text I provide you with. "
    "If the provided text is a URL, you need to visit the URL, summarise the contents, "
    "and finally simplify the summary into plain language. "
    "Your response should only contain the summary and nothing else."
)

SIMPLIFY_PROMPT = (
    "Simplify the following text for {audience}:\n\n"
    "\"{input}\"\n\n"
    "Instructions: {instructions}\n"
)

WORD_INFO_PROMPT = (
    "Provide the following details for the word \"{word}\":\n"
    "1. A clear and concise definition in plain language. "
    "If no definition exists, say \"No definitions found.\"\n"
    "2. A list of synonyms (if any). If there are no synonyms, say \"No synonyms found.\"\n"
)


def build_simplify_prompt(text: str, audience: Audience) -> str:
    return SIMPLIFY_PROMPT.format(
        audience=AUDIENCE_PHRASES[audience],
        input=text.strip(),
        instructions=SIMPLIFY_INSTRUCTIONS,
    )


def build_word_info_prompt(word: str) -> str:
    return WORD_INFO_PROMPT.format(word=word)
