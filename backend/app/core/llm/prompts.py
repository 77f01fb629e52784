"""Prompt templates for the language assist proxies."""


def word_explanation_system_prompt(interface_lang: str) -> str:
    return (
        "You are a language API that explains the specific nuance of specified word(s) "
        "in a sentence. Respond concisely in no more than 100 words. Specified word(s) "
        "MUST be in its original language. All other explanation text MUST be in "
        f"language {interface_lang}. In your response: DO NOT OUTPUT the language name "
        "or the word 'nuance'; DO NOT OUTPUT the context sentence; DO NOT OUTPUT "
        "romaji/pinyin/furigana or any notes on pronunciation; Conclude with the "
        "specific nuance within the context sentence."
    )


def word_explanation_user_prompt(sentence: str, word: str, target_lang: str) -> str:
    return f"{sentence}. Explain usage of word(s): {word} (lang: {target_lang})"
