"""
Keyword normalization applied before any scoring or generation step.

Steps, in order:
1. lowercase and trim
2. if the text opens with an instruction verb ("crie", "could you", ...),
   strip that verb and remove filler words, whole-word only
3. apply the misspelling dictionary, whole-word and case-insensitive

Re-normalizing normalized text is expected to be a no-op, with two exceptions:
- a correction produces a word that another correction or filler rule matches
  (e.g. "aplicação" -> "aplicativo", which a second pass turns into "app")
- the text opens with two instruction verbs; only the first one is stripped,
  so a second pass strips the other (e.g. "could you, please, build an api?"
  -> "build API" -> "API")
"""

import logging
import re
from typing import Dict, List, Optional

from promptforge.models.prompt_models import PromptSpec
from promptforge.services.errors import PromptValidationError
from promptforge.utils.text_matching import collapse_whitespace, word_pattern

logger = logging.getLogger(__name__)


INSTRUCTION_VERBS: List[str] = [
    # Portuguese
    "faça", "crie", "desenvolva", "elabore", "construa", "produza", "prepare",
    "monte", "conceba", "projete", "planeje", "desenhe", "escreva", "programe",
    "implemente", "ajude", "me ajude", "preciso", "quero", "desejo", "gostaria",
    "necessito", "pode", "poderia", "como", "me dê", "sugira", "recomende",
    "gere", "liste", "explique", "resuma", "compare", "defina", "traduza",
    "otimize", "refine", "modifique", "altere", "simplifique", "detalhe",
    # English
    "create", "build", "make", "develop", "design", "write", "generate",
    "explain", "describe", "list", "summarize", "compare", "help me",
    "i need", "i want", "i would like", "could you", "can you", "please",
]

FILLER_WORDS: List[str] = [
    # Portuguese
    "um", "uma", "uns", "umas",
    "para", "que", "me", "mim", "lhe", "ele", "ela", "eles", "elas",
    "a", "o", "as", "os",
    "de", "da", "do", "das", "dos",
    "em", "no", "na", "nos", "nas",
    "com", "por", "sobre", "acerca", "tipo", "estilo",
    "por favor", "gentilmente", "agora", "então",
    "quero que", "gostaria de", "preciso de", "me faça", "me crie",
    # English
    "an", "the", "for", "of", "to", "with", "about", "me", "please", "some",
]

# Compound terms are applied before single words so they are not split.
KEYWORD_CORRECTIONS: Dict[str, str] = {
    "desingners": "designers",
    "programaçao": "programação",
    "progamação": "programação",
    "programacão": "programação",
    "develoment": "development",
    "desenvolviment": "desenvolvimento",
    "markting": "marketing",
    "inteligencia": "inteligência",
    "artifical": "artificial",
    "inteligecia": "inteligência",
    "assisntent": "assistant",
    "assistemt": "assistant",
    "assitant": "assistant",
    "generacao": "geração",
    "linguagen": "linguagem",
    "linguajem": "linguagem",
    "aplicativo": "app",
    "aplicação": "aplicativo",
    "desenvolvedor": "dev",
    "ux/ui": "UX/UI design",
    "disigner": "designer",
    "desinger": "designer",
    "usuario": "usuário",
    "experiencia": "experiência",
    "api": "API",
    "restful": "RESTful",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "reactjs": "React",
    "nodejs": "Node.js",
    "nextjs": "Next.js",
}

_EDGE_PUNCTUATION = re.compile(r"^[.,!?;:]+|[.,!?;:]+$")


def _by_length(terms: List[str]) -> List[str]:
    # Longest first so "me ajude" wins over "me", "por favor" over "por".
    return sorted(set(terms), key=len, reverse=True)


_VERBS_LONGEST_FIRST = _by_length(INSTRUCTION_VERBS)
_FILLERS_LONGEST_FIRST = _by_length(FILLER_WORDS)


def detect_instruction_verb(text: str) -> Optional[str]:
    """Return the instruction verb the (lowercased) text opens with, if any."""
    for verb in _VERBS_LONGEST_FIRST:
        if text == verb or text.startswith(verb + " ") or text.startswith(verb + ","):
            return verb
    return None


def strip_instruction(text: str, verb: str) -> str:
    """Drop the leading verb and the filler words of an instruction."""
    text = text[len(verb):].lstrip(" ,")
    for word in _FILLERS_LONGEST_FIRST:
        text = word_pattern(word).sub(" ", text)
    text = collapse_whitespace(text)
    text = _EDGE_PUNCTUATION.sub("", text).strip()
    return collapse_whitespace(text)


def apply_corrections(text: str) -> str:
    """Apply the misspelling dictionary, compound terms first."""
    compound = [(k, v) for k, v in KEYWORD_CORRECTIONS.items() if " " in k]
    single = [(k, v) for k, v in KEYWORD_CORRECTIONS.items() if " " not in k]
    for incorrect, correct in compound + single:
        text = word_pattern(incorrect).sub(correct, text)
    return text


def normalize(raw_keywords: Optional[str]) -> str:
    """Normalize raw keyword input. Output depends only on the input text."""
    text = (raw_keywords or "").lower().strip()

    verb = detect_instruction_verb(text)
    if verb:
        text = strip_instruction(text, verb)
        logger.debug("Instruction detected (verb=%r), extracted keywords: %r", verb, text)

    return apply_corrections(text)


def prepare_spec(spec: PromptSpec) -> PromptSpec:
    """Return a copy of spec with normalized keywords.

    Raises:
        PromptValidationError: keywords are missing or empty after normalization
    """
    if not spec.keywords or not spec.keywords.strip():
        raise PromptValidationError("Keywords are required")

    keywords = normalize(spec.keywords)
    if not keywords:
        raise PromptValidationError("Keywords are empty after normalization")

    return spec.model_copy(update={"keywords": keywords})
