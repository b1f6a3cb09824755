"""Utility functions to build the instructions sent to the AI collaborators."""

from typing import Optional

from promptforge.models.prompt_models import (
    Complexity,
    Language,
    Length,
    PromptMode,
    PromptSpec,
    RefinementRequest,
    Tone,
)
from promptforge.utils.prompt_registry import (
    COMPLEXITY_DETAIL,
    DEFAULT_COMPLEXITY,
    DEFAULT_TONE,
    TONE_DESCRIPTIONS,
    mode_template,
    style_template,
)

SHORT_MAX_LINES = 6

LENGTH_RESTRICTION = {
    Language.PORTUGUESE: (
        f"RESTRIÇÃO IMPORTANTE DE TAMANHO: Sua resposta DEVE ter NO MÁXIMO {SHORT_MAX_LINES} LINHAS DE TEXTO."
        f" Seja extremamente conciso e focado. Não ultrapasse {SHORT_MAX_LINES} linhas no total, incluindo"
        " qualquer formatação markdown ou quebras de linha."
    ),
    Language.ENGLISH: (
        f"IMPORTANT LENGTH RESTRICTION: Your response MUST be MAXIMUM {SHORT_MAX_LINES} LINES OF TEXT."
        f" Be extremely concise and focused. Do not exceed {SHORT_MAX_LINES} lines total, including any"
        " markdown formatting or line breaks."
    ),
}


def _tone(spec: PromptSpec) -> str:
    if spec.tone is None:
        return DEFAULT_TONE[spec.language]
    return TONE_DESCRIPTIONS[spec.tone][spec.language]


def _detail(spec: PromptSpec) -> str:
    if spec.complexity is None:
        return DEFAULT_COMPLEXITY[spec.language]
    return COMPLEXITY_DETAIL[spec.complexity][spec.language]


def _style_definition(spec: PromptSpec) -> Optional[str]:
    if not spec.is_image_mode:
        return None
    style = style_template(spec.image_style)
    return style.definition[spec.language] if style else None


def _is_refinement(spec: PromptSpec) -> bool:
    return isinstance(spec, RefinementRequest)


# =============================================================================
# PRIMARY ATTEMPT: system + user instruction
# =============================================================================


def get_system_instruction(spec: PromptSpec) -> str:
    """Role instruction derived from mode, tone, complexity and style."""
    mode = mode_template(spec.mode)
    restriction = LENGTH_RESTRICTION[spec.language] if spec.length == Length.SHORT else ""

    if spec.language == Language.ENGLISH:
        instruction = f"""You are an AI assistant specializing in {mode.label[spec.language]}.
Your task is to analyze the user's request and generate a detailed and well-structured response in English.
{mode.structure_hint[spec.language]}
The tone must be {_tone(spec)} and the level of detail {_detail(spec)}.
IMPORTANT: Use Markdown formatting to structure your response. Use headings (##, ###), bullet lists (*), numbered lists (1., 2.), **bold** for emphasis and `code` when necessary.
Be practical, direct to the point, and provide useful information.
Generate only the final requested response, without introductions, meta-discourse, or additional comments such as "Sure, here is...".
{restriction}"""
    else:
        instruction = f"""Você é um assistente de IA especialista em {mode.label[spec.language]}.
Sua tarefa é analisar a solicitação do usuário e gerar uma resposta detalhada e bem estruturada em português.
{mode.structure_hint[spec.language]}
O tom deve ser {_tone(spec)} e o nível de detalhe {_detail(spec)}.
IMPORTANTE: Utilize formatação Markdown para estruturar sua resposta. Use cabeçalhos (##, ###), listas com marcadores (*), listas numeradas (1., 2.), **negrito** para ênfase e `código` quando necessário.
Seja prático, direto ao ponto e forneça informações úteis.
Gere apenas a resposta final solicitada, sem introduções, metadiscursos ou comentários adicionais como "Claro, aqui está...".
{restriction}"""

    definition = _style_definition(spec)
    if definition:
        style_name = spec.image_style.upper()
        if spec.language == Language.ENGLISH:
            instruction += f"""

IMPORTANT FOR IMAGE GENERATION: You MUST create a prompt for an image in the style {definition}
This style is an ABSOLUTE REQUIREMENT and must define the visual aesthetics of the image.
Include explicit references to the style {style_name} in different parts of the prompt."""
        else:
            instruction += f"""

IMPORTANTE PARA GERAÇÃO DE IMAGEM: Você DEVE criar um prompt para uma imagem no estilo {definition}
Este estilo é um REQUISITO ABSOLUTO e deve definir a estética visual da imagem.
Inclua referências explícitas ao estilo {style_name} em diferentes partes do prompt."""

    if spec.is_image_mode and spec.negative_prompt:
        instruction += (
            "\nAlso consider the negative prompt provided by the user, specifying elements or styles to AVOID."
            if spec.language == Language.ENGLISH
            else "\nConsidere também o prompt negativo fornecido pelo usuário, especificando elementos ou estilos a EVITAR."
        )

    return instruction.strip()


def _characteristics(spec: PromptSpec) -> str:
    english = spec.language == Language.ENGLISH
    lines = [
        f"- {'Tone' if english else 'Tom'}: {_tone(spec)}",
        f"- {'Detail Level' if english else 'Nível de Detalhe'}: {_detail(spec)}",
    ]
    if spec.context:
        lines.append(f"- {'Additional Context' if english else 'Contexto Adicional'}: {spec.context}")
    if spec.include_examples:
        lines.append(
            "- Include relevant examples or elaborations within the response."
            if english
            else "- Inclua exemplos ou elaborações relevantes dentro da resposta."
        )
    lines.append(
        "- Use complete Markdown formatting to improve the readability of the response."
        if english
        else "- Utilize formatação Markdown completa para melhorar a legibilidade da resposta."
    )
    if spec.length == Length.SHORT:
        lines.append(
            f"- STRICT LENGTH LIMIT: Maximum {SHORT_MAX_LINES} lines total."
            if english
            else f"- LIMITE ESTRITO DE TAMANHO: Máximo de {SHORT_MAX_LINES} linhas no total."
        )
    return "\n".join(lines)


def _image_requirements(spec: PromptSpec) -> str:
    english = spec.language == Language.ENGLISH
    text = ""

    definition = _style_definition(spec)
    if definition:
        style_name = spec.image_style.upper()
        text += (
            f"\n\nThis request is for an IMAGE GENERATION prompt in {style_name} style."
            f"\nABSOLUTE REQUIREMENT: The image must be {definition}"
            if english
            else f"\n\nEsta solicitação é para um prompt de GERAÇÃO DE IMAGEM no estilo {style_name}."
            f"\nREQUISITO ABSOLUTO: A imagem deve ser {definition}"
        )

    if spec.is_image_mode and spec.negative_prompt:
        text += (
            f"\n\nNEGATIVE PROMPT (Elements to AVOID): {spec.negative_prompt}"
            if english
            else f"\n\nPROMPT NEGATIVO (Elementos a EVITAR): {spec.negative_prompt}"
        )

    return text


def get_user_instruction(spec: PromptSpec) -> str:
    """User instruction restating the keywords, context and formatting requirements.

    For a refinement request the previous prompt and the requested change
    replace the raw keywords as the subject of the request.
    """
    english = spec.language == Language.ENGLISH
    mode_label = mode_template(spec.mode).label[spec.language]
    size = ("very concise" if english else "muito concisa") if spec.length == Length.SHORT else (
        "detailed" if english else "detalhada"
    )

    if _is_refinement(spec):
        if english:
            header = f"""Refine the prompt below, in "{mode_label}" mode, applying the requested change.

PREVIOUS PROMPT:
\"\"\"{spec.previous_prompt_text}\"\"\"

REQUESTED CHANGE: {spec.modification_request}
Original keywords: "{spec.keywords}"

Keep what already works and return only the complete refined prompt, {size}."""
        else:
            header = f"""Refine o prompt abaixo, no modo "{mode_label}", aplicando a alteração solicitada.

PROMPT ANTERIOR:
\"\"\"{spec.previous_prompt_text}\"\"\"

ALTERAÇÃO SOLICITADA: {spec.modification_request}
Palavras-chave originais: "{spec.keywords}"

Mantenha o que já funciona e retorne apenas o prompt refinado completo, de forma {size}."""
    elif english:
        header = f'Generate a {size} response for the following request, in "{mode_label}" mode: "{spec.keywords}".'
    else:
        header = f'Gere uma resposta {size} para a seguinte solicitação, no modo "{mode_label}": "{spec.keywords}".'

    label = "Desired characteristics for the response:" if english else "Características desejadas para a resposta:"
    return f"{header}\n\n{label}\n{_characteristics(spec)}{_image_requirements(spec)}"


# =============================================================================
# RETRY ATTEMPT: single consolidated instruction
# =============================================================================


def get_consolidated_instruction(spec: PromptSpec) -> str:
    """Single instruction restating every requirement more forcefully."""
    english = spec.language == Language.ENGLISH
    mode = mode_template(spec.mode)

    if english:
        opening = (
            "MANDATORY TASK. The previous attempt did not produce a usable answer."
            f" Write the complete final prompt now, for {mode.label[spec.language]}."
            " Do NOT return an empty answer, do NOT ask questions and do NOT add introductions."
        )
    else:
        opening = (
            "TAREFA OBRIGATÓRIA. A tentativa anterior não produziu uma resposta utilizável."
            f" Escreva agora o prompt final completo, para {mode.label[spec.language]}."
            " NÃO retorne uma resposta vazia, NÃO faça perguntas e NÃO adicione introduções."
        )

    parts = [opening, mode.structure_hint[spec.language], get_user_instruction(spec)]
    if spec.length == Length.SHORT:
        parts.append(LENGTH_RESTRICTION[spec.language])
    return "\n\n".join(parts)


# =============================================================================
# JSON COLLABORATORS (English diagnostics)
# =============================================================================


def _parameters_block(spec: PromptSpec) -> str:
    lines = [
        f'- Keywords: "{spec.keywords or "Not provided"}"',
        f'- Context: "{spec.context or "Not provided"}"',
        f"- Mode: {spec.mode.value if spec.mode else 'Not specified'}",
        f"- Tone: {spec.tone.value if spec.tone else 'Not specified'}",
        f"- Complexity: {spec.complexity.value if spec.complexity else 'Not specified'}",
        f"- Length: {spec.length.value}",
        f"- Include examples: {'Yes' if spec.include_examples else 'No'}",
        f"- Output language: {spec.language.value}",
    ]
    if spec.image_style:
        lines.append(f"- Image style: {spec.image_style}")
    if spec.negative_prompt:
        lines.append(f"- Negative prompt: {spec.negative_prompt}")
    return "\n".join(lines)


def get_suggestion_prompt(spec: PromptSpec, max_suggestions: int) -> str:
    """Prompt for the advisory suggestion collaborator."""
    return f"""
You are an expert in prompt engineering for AI. Analyze the following parameters and generate smart suggestions to improve the prompt.

**CURRENT PARAMETERS:**
{_parameters_block(spec)}

Return practical, specific suggestions in the following JSON format:
{{
  "suggestions": [
    {{
      "type": "keyword|context|tone|structure|enhancement",
      "title": "Suggestion title",
      "description": "Clear description of what to do",
      "value": "Specific value to apply",
      "field": "form field the value applies to (keywords, context, tone, complexity, length, negative_prompt, image_style)",
      "confidence": 0-100,
      "reasoning": "Why this suggestion matters",
      "example": "Optional example"
    }}
  ]
}}

**SUGGESTION TYPES:**
1. keyword: improvements to the keywords
2. context: adding or improving the context
3. tone: tone adjustments based on the mode
4. structure: improvements to the overall structure
5. enhancement: additional features

Focus on actionable suggestions tailored to the selected mode and tone.
Maximum of {max_suggestions} suggestions, prioritized by impact.
"""


def get_analysis_prompt(spec: PromptSpec, generated_prompt: Optional[str] = None) -> str:
    """Prompt for the AI-assisted analysis collaborator."""
    generated_section = f'\n**GENERATED PROMPT:**\n"{generated_prompt}"\n' if generated_prompt else ""

    return f"""
You are an expert in prompt engineering for AI. Analyze the following prompt parameters and provide a detailed analysis.

**PROMPT PARAMETERS:**
{_parameters_block(spec)}
{generated_section}
Provide a structured analysis in the following JSON format:
{{
  "score": 0-100,
  "strengths": ["strength 1", "strength 2"],
  "weaknesses": ["weakness 1", "weakness 2"],
  "suggestions": ["suggestion 1", "suggestion 2"],
  "improvements": ["improvement 1", "improvement 2"],
  "effectiveness": 0-100,
  "clarity": 0-100,
  "specificity": 0-100
}}

**EVALUATION CRITERIA:**
- Clarity: how clear and understandable the prompt is
- Specificity: level of detail and precision
- Effectiveness: likelihood of producing good results
- Structure: organization and coherence of the elements
- Completeness: whether all necessary elements are present

Be specific and practical. Focus on actionable improvements. At most 5 items per list.
"""


def get_parse_instruction_prompt(language: Language) -> str:
    """System prompt for turning a free-text instruction into parameters."""
    modes = [mode.value for mode in PromptMode]
    tones = [tone.value for tone in Tone]
    complexities = [complexity.value for complexity in Complexity]
    output_language = "English" if language == Language.ENGLISH else "Portuguese"

    return f"""
You are an AI assistant specialized in parsing user instructions for an AI prompt generator. Analyze the user's instruction and extract the core parameters.

Respond ONLY with a valid JSON object containing the extracted parameters:
- "keywords": string, the main topic
- "mode": string, one of {modes}
- "tone": string, optional, one of {tones}
- "complexity": string, optional, one of {complexities}
- "image_style": string, optional, relevant visual styles for image_generation mode only

If a parameter cannot be determined, omit it from the JSON. The values for mode, tone and complexity must exactly match one of the valid options. The keywords should capture the essence of the request, not repeat the instruction. Keywords and image_style must be in {output_language}.
"""


TOPIC_MODE_DESCRIPTIONS = {
    PromptMode.APP_CREATION: "application development",
    PromptMode.IMAGE_GENERATION: "image generation",
    PromptMode.CONTENT_CREATION: "content creation (article, post, etc.)",
    PromptMode.PROBLEM_SOLVING: "solving a specific problem",
    PromptMode.CODING: "programming or code development",
    PromptMode.INSTRUCT: "step-by-step instructions",
    PromptMode.EXPLAIN: "detailed explanation of a concept",
}


def get_topic_system_prompt(count: int, language: Language) -> str:
    """System prompt for the topic ideas collaborator: plain lines, no JSON."""
    output_language = "English" if language == Language.ENGLISH else "Portuguese"
    return (
        "You are an AI assistant specialized in generating concise and creative topic ideas for AI prompts."
        f" Respond ONLY with a list of {count} topic ideas, each on a new line, without any introduction,"
        " explanation, numbering, or surrounding text like quotes or dashes."
        f" The response must be in {output_language}."
    )


def get_topic_prompt(
    mode: PromptMode, count: int, keywords: Optional[str] = None, context: Optional[str] = None
) -> str:
    """User prompt for topic ideas: refinements of the current idea or fresh ones."""
    description = TOPIC_MODE_DESCRIPTIONS[mode]
    if keywords:
        context_part = f' and context "{context}"' if context else ""
        return (
            f'Based on the current idea "{keywords}"{context_part}, suggest {count} related or refined topic'
            f' ideas suitable for the prompt generation mode: "{description}". Focus on variations or improvements.'
        )
    return (
        f"Suggest {count} diverse, specific, and creative topic ideas suitable for the prompt generation"
        f' mode: "{description}".'
    )


def get_simple_topic_prompt(mode: PromptMode, count: int, language: Language) -> str:
    """Shorter retry prompt used when the first answer held no topics."""
    output_language = "English" if language == Language.ENGLISH else "Portuguese"
    return f'List {count} topic ideas for "{TOPIC_MODE_DESCRIPTIONS[mode]}" in {output_language}, one per line.'
