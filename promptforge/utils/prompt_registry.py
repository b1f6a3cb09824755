"""
Declarative registry of per-mode and per-style prompt text.

Maps (mode, image_style?) to the template text and example bank used by the
fallback synthesizer, and supplies the mode labels and style definitions the
instruction builders embed. Both consumers read the same tables so the
fallback text and the instructions cannot drift apart.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from promptforge.models.prompt_models import Complexity, Language, PromptMode, Tone

PT = Language.PORTUGUESE
EN = Language.ENGLISH

Localized = Dict[Language, str]


@dataclass(frozen=True)
class ModeTemplate:
    """Text registered for one prompt mode."""

    label: Localized
    fallback_clause: Localized
    required_phrase: Localized
    structure_hint: Localized
    examples: Dict[Language, Tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class StyleTemplate:
    """Text registered for one image style."""

    definition: Localized
    examples: Dict[Language, Tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class TemplateEntry:
    """Resolved (mode, style) entry."""

    template_text: str
    example_bank: Tuple[str, ...]
    required_phrase: str
    style_definition: Optional[str] = None
    style_examples: bool = False


TONE_DESCRIPTIONS: Dict[Tone, Localized] = {
    Tone.PROFESSIONAL: {PT: "profissional e formal", EN: "professional and formal"},
    Tone.FRIENDLY: {PT: "amigável e acessível", EN: "friendly and accessible"},
    Tone.ENTHUSIASTIC: {PT: "entusiasmado e encorajador", EN: "enthusiastic and encouraging"},
    Tone.CREATIVE: {PT: "criativo e inspirador", EN: "creative and inspiring"},
    Tone.CASUAL: {PT: "casual e conversacional", EN: "casual and conversational"},
    Tone.TECHNICAL: {PT: "técnico e preciso", EN: "technical and precise"},
    Tone.NEUTRAL: {PT: "neutro e balanceado", EN: "neutral and balanced"},
    Tone.FORMAL: {PT: "formal e estruturado", EN: "formal and structured"},
    Tone.AUTHORITATIVE: {PT: "autoritativo e confiante", EN: "authoritative and confident"},
}

# Detail level requested from the Generation Service
COMPLEXITY_DETAIL: Dict[Complexity, Localized] = {
    Complexity.SIMPLE: {PT: "simples e direto", EN: "simple and direct"},
    Complexity.MODERATE: {PT: "moderadamente detalhado", EN: "moderately detailed"},
    Complexity.DETAILED: {PT: "detalhado e abrangente", EN: "detailed and comprehensive"},
    Complexity.BEGINNER: {PT: "adequado para iniciantes", EN: "suitable for beginners"},
    Complexity.INTERMEDIATE: {PT: "de nível intermediário", EN: "intermediate level"},
    Complexity.ADVANCED: {PT: "para nível avançado", EN: "advanced level"},
}

# Qualifier of "instructions" in the fallback sentence
COMPLEXITY_INSTRUCTIONS: Dict[Complexity, Localized] = {
    Complexity.SIMPLE: {PT: "simples e diretas", EN: "simple and direct"},
    Complexity.MODERATE: {PT: "com moderada complexidade", EN: "of moderate complexity"},
    Complexity.DETAILED: {PT: "detalhadas e abrangentes", EN: "detailed and comprehensive"},
    Complexity.BEGINNER: {PT: "para iniciantes", EN: "for beginners"},
    Complexity.INTERMEDIATE: {PT: "para nível intermediário", EN: "for an intermediate level"},
    Complexity.ADVANCED: {PT: "para nível avançado", EN: "for an advanced level"},
}

DEFAULT_TONE: Localized = {PT: "profissional", EN: "professional"}
DEFAULT_COMPLEXITY: Localized = {PT: "moderadas", EN: "moderate"}

GENERAL_MODE = ModeTemplate(
    label={PT: "geração de conteúdo e planejamento", EN: "content generation and planning"},
    fallback_clause={
        PT: " O prompt deve deixar claros o objetivo, o público e o formato esperado da resposta.",
        EN: " The prompt should make the goal, the audience and the expected answer format explicit.",
    },
    required_phrase={PT: "prompt", EN: "prompt"},
    structure_hint={
        PT: "Adapte a estrutura conforme apropriado para a tarefa.",
        EN: "Adapt the structure as appropriate for the task.",
    },
)

MODE_TEMPLATES: Dict[PromptMode, ModeTemplate] = {
    PromptMode.APP_CREATION: ModeTemplate(
        label={PT: "desenvolvimento de aplicativo", EN: "app development"},
        fallback_clause={
            PT: (
                " O prompt deve guiar o desenvolvimento de um aplicativo, considerando funcionalidades,"
                " design de interface, experiência do usuário e tecnologias recomendadas."
            ),
            EN: (
                " The prompt should guide the development of an application, covering features,"
                " interface design, user experience and recommended technologies."
            ),
        },
        required_phrase={PT: "aplicativo", EN: "application"},
        structure_hint={
            PT: (
                "Estruture a resposta com seções como Objetivo, Funcionalidades, Estrutura de"
                " Telas/Componentes, Tecnologias Sugeridas e Próximos Passos."
            ),
            EN: (
                "Structure the response with sections like Objective, Features, Screen/Component"
                " Structure, Suggested Technologies and Next Steps."
            ),
        },
        examples={
            PT: (
                "Crie um aplicativo de gerenciamento de tarefas com foco em produtividade para profissionais."
                " O app deve incluir listas de tarefas, priorização, lembretes, integração com calendário e"
                " análise de produtividade. A interface deve ser minimalista, com um esquema de cores que"
                " promova foco.",
                "Desenvolva um aplicativo de fitness personalizado que adapte treinos às necessidades do"
                " usuário, com rastreamento de exercícios, planos ajustáveis, métricas de progresso e"
                " integração com wearables. O design deve ser energético, com gamificação para engajamento.",
            ),
            EN: (
                "Create a task management app focused on productivity for professionals. It should include"
                " task lists, prioritization, reminders, calendar integration and productivity analytics,"
                " with a minimalist interface and a colour scheme that promotes focus.",
                "Develop a personalised fitness app that adapts workouts to the user, with exercise"
                " tracking, adjustable plans, progress metrics and wearable integration. The design should"
                " feel energetic, with gamification to drive engagement.",
            ),
        },
    ),
    PromptMode.IMAGE_GENERATION: ModeTemplate(
        label={PT: "geração de imagem", EN: "image generation"},
        fallback_clause={
            PT: (
                " O prompt deve descrever detalhadamente a imagem a ser criada, incluindo estilo visual,"
                " elementos principais, composição, cores, iluminação e atmosfera."
            ),
            EN: (
                " The prompt should describe the image to be created in detail, including visual style,"
                " main elements, composition, colours, lighting and atmosphere."
            ),
        },
        required_phrase={PT: "imagem", EN: "image"},
        structure_hint={
            PT: "Produza uma descrição visual detalhada e coesa da imagem.",
            EN: "Produce a detailed, cohesive visual description of the image.",
        },
        examples={
            PT: (
                "Crie uma imagem fotorrealista de uma cidade futurista à noite. Arranha-céus com luzes neon"
                " em azul e roxo, carros voadores e hologramas flutuantes. Perspectiva ao nível da rua,"
                " iluminação dramática com reflexos molhados nas ruas.",
                "Gere uma paisagem fantástica de um vale com montanhas flutuantes cobertas de vegetação"
                " exuberante e pequenas cachoeiras caindo no vazio. Luz dourada do pôr do sol e cores"
                " vibrantes com predominância de verdes, azuis e dourados.",
            ),
            EN: (
                "Create a photorealistic image of a futuristic city at night. Skyscrapers with blue and"
                " purple neon, flying cars and floating holograms. Street-level perspective, dramatic"
                " lighting with wet reflections on the streets.",
                "Generate a fantasy landscape of a valley with floating mountains covered in lush"
                " vegetation and small waterfalls pouring into the void. Golden sunset light and vibrant"
                " greens, blues and golds.",
            ),
        },
    ),
    PromptMode.CONTENT_CREATION: ModeTemplate(
        label={PT: "criação de conteúdo", EN: "content creation"},
        fallback_clause={
            PT: (
                " O prompt deve orientar a criação de conteúdo original, definindo público-alvo, formato,"
                " estrutura dos tópicos e chamada para ação."
            ),
            EN: (
                " The prompt should guide the creation of original content, defining target audience,"
                " format, topic structure and call to action."
            ),
        },
        required_phrase={PT: "conteúdo", EN: "content"},
        structure_hint={
            PT: "Entregue o texto completo do conteúdo, com título, seções e conclusão.",
            EN: "Deliver the complete text of the content, with a title, sections and a conclusion.",
        },
        examples={
            PT: (
                "Escreva um artigo de blog sobre hábitos de sono saudáveis para profissionais remotos, com"
                " introdução envolvente, cinco dicas práticas baseadas em evidências e uma conclusão com"
                " chamada para ação.",
            ),
            EN: (
                "Write a blog article about healthy sleep habits for remote professionals, with an engaging"
                " introduction, five practical evidence-based tips and a conclusion with a call to action.",
            ),
        },
    ),
    PromptMode.PROBLEM_SOLVING: ModeTemplate(
        label={PT: "resolução de problemas", EN: "problem solving"},
        fallback_clause={
            PT: (
                " O prompt deve descrever o problema, as restrições conhecidas e pedir uma análise das"
                " causas com alternativas de solução comparadas."
            ),
            EN: (
                " The prompt should describe the problem and its known constraints and ask for a root-cause"
                " analysis with compared solution alternatives."
            ),
        },
        required_phrase={PT: "problema", EN: "problem"},
        structure_hint={
            PT: "Estruture a resposta em Diagnóstico, Causas Prováveis, Soluções e Recomendação.",
            EN: "Structure the response as Diagnosis, Likely Causes, Solutions and Recommendation.",
        },
        examples={
            PT: (
                "Analise por que a taxa de conversão do checkout de uma loja online caiu 30% após uma"
                " atualização do site, liste as causas mais prováveis e proponha três soluções priorizadas"
                " por impacto e esforço.",
            ),
            EN: (
                "Analyse why an online store's checkout conversion rate dropped 30% after a site update,"
                " list the most likely causes and propose three solutions prioritised by impact and effort.",
            ),
        },
    ),
    PromptMode.CODING: ModeTemplate(
        label={PT: "programação", EN: "programming"},
        fallback_clause={
            PT: (
                " O prompt deve especificar linguagem, requisitos funcionais, restrições e o formato do"
                " código esperado, incluindo tratamento de erros e testes."
            ),
            EN: (
                " The prompt should specify language, functional requirements, constraints and the expected"
                " code format, including error handling and tests."
            ),
        },
        required_phrase={PT: "código", EN: "code"},
        structure_hint={
            PT: "Inclua requisitos, abordagem, código comentado e instruções de teste.",
            EN: "Include requirements, approach, commented code and testing instructions.",
        },
        examples={
            PT: (
                "Implemente em Python uma função que valide CPFs, com tratamento de entradas com máscara,"
                " mensagens de erro claras e testes unitários cobrindo casos válidos e inválidos.",
            ),
            EN: (
                "Implement a Python function that validates ISBN-13 codes, handling hyphenated input, with"
                " clear error messages and unit tests covering valid and invalid cases.",
            ),
        },
    ),
    PromptMode.INSTRUCT: ModeTemplate(
        label={PT: "criação de instruções", EN: "instruction writing"},
        fallback_clause={
            PT: (
                " O prompt deve pedir instruções passo a passo, numeradas, com pré-requisitos e o"
                " resultado esperado de cada etapa."
            ),
            EN: (
                " The prompt should ask for numbered step-by-step instructions, with prerequisites and"
                " the expected result of each step."
            ),
        },
        required_phrase={PT: "passo a passo", EN: "step-by-step"},
        structure_hint={
            PT: "Apresente passos numerados claros, com pré-requisitos no início.",
            EN: "Present clear numbered steps, with prerequisites at the start.",
        },
        examples={
            PT: (
                "Liste o passo a passo para configurar um backup automático diário de fotos do celular"
                " para a nuvem, incluindo pré-requisitos e como verificar se o backup funcionou.",
            ),
            EN: (
                "List the steps to set up a daily automatic backup of phone photos to the cloud, including"
                " prerequisites and how to verify the backup worked.",
            ),
        },
    ),
    PromptMode.EXPLAIN: ModeTemplate(
        label={PT: "explicação de conceitos", EN: "concept explanation"},
        fallback_clause={
            PT: (
                " O prompt deve pedir uma explicação progressiva do conceito, com analogias, exemplos"
                " concretos e um resumo final."
            ),
            EN: (
                " The prompt should ask for a progressive explanation of the concept, with analogies,"
                " concrete examples and a closing summary."
            ),
        },
        required_phrase={PT: "explicação", EN: "explanation"},
        structure_hint={
            PT: "Explique do básico ao avançado, com analogias e exemplos.",
            EN: "Explain from the basics to advanced points, with analogies and examples.",
        },
        examples={
            PT: (
                "Explique como funcionam as redes neurais para alguém sem formação técnica, usando uma"
                " analogia do cotidiano, um exemplo simples de classificação de imagens e um resumo final.",
            ),
            EN: (
                "Explain how neural networks work to someone with no technical background, using an"
                " everyday analogy, a simple image classification example and a closing summary.",
            ),
        },
    ),
}

STYLE_TEMPLATES: Dict[str, StyleTemplate] = {
    "realistic": StyleTemplate(
        definition={
            PT: (
                "HIPER-REALISTA, com altíssimo nível de detalhe fotográfico, texturas realistas,"
                " iluminação natural e física correta."
            ),
            EN: (
                "HYPER-REALISTIC, with an extremely high level of photographic detail, realistic textures,"
                " natural lighting and correct physics."
            ),
        },
        examples={
            PT: (
                "Crie uma imagem hiper-realista de um tigre siberiano emergindo de um lago congelado,"
                " gotas de água congelando no ar, luz do amanhecer criando reflexos dourados no pelo molhado"
                " e profundidade de campo rasa focando nos olhos.",
            ),
            EN: (
                "Create a hyper-realistic image of a Siberian tiger emerging from a frozen lake, water"
                " droplets freezing in the air, dawn light casting golden highlights on its wet fur and a"
                " shallow depth of field focused on its eyes.",
            ),
        },
    ),
    "cinematic": StyleTemplate(
        definition={
            PT: (
                "CINEMATOGRÁFICO, com enquadramento cuidadoso, profundidade de campo, contraste dramático"
                " e paleta de cores característica de filmes."
            ),
            EN: (
                "CINEMATIC, with careful framing, depth of field, dramatic contrast and a film-like colour"
                " palette."
            ),
        },
    ),
    "anime": StyleTemplate(
        definition={
            PT: "ANIME/MANGÁ, com linhas bem definidas, olhos expressivos e proporções estilizadas.",
            EN: "ANIME/MANGA, with well-defined lines, large expressive eyes and stylised proportions.",
        },
    ),
    "cartoon": StyleTemplate(
        definition={
            PT: "CARTOON, com formas simplificadas, contornos evidentes e cores vivas.",
            EN: "CARTOON, with simplified shapes, bold outlines and bright colours.",
        },
    ),
    "pixel_art": StyleTemplate(
        definition={
            PT: "PIXEL ART, com resolução baixa deliberada, pixels visíveis e paleta limitada.",
            EN: "PIXEL ART, with deliberately low resolution, visible pixels and a limited palette.",
        },
    ),
    "watercolor": StyleTemplate(
        definition={
            PT: "AQUARELA, com cores translúcidas, fusão suave de tons e textura de papel visível.",
            EN: "WATERCOLOR, with translucent colours, soft blending and visible paper texture.",
        },
    ),
    "oil_painting": StyleTemplate(
        definition={
            PT: "PINTURA A ÓLEO, com textura de tela visível, pinceladas densas e cores profundas.",
            EN: "OIL PAINTING, with visible canvas texture, dense brushstrokes and rich colour depth.",
        },
    ),
    "digital_art": StyleTemplate(
        definition={
            PT: "ARTE DIGITAL moderna, com acabamento polido, cores vibrantes e iluminação dinâmica.",
            EN: "modern DIGITAL ART, with a polished finish, vibrant colours and dynamic lighting.",
        },
    ),
    "abstract": StyleTemplate(
        definition={
            PT: "ABSTRATO, focando em formas, cores e composições não-figurativas.",
            EN: "ABSTRACT, focusing on shapes, colours and non-figurative compositions.",
        },
    ),
    "double_exposure": StyleTemplate(
        definition={
            PT: (
                "DUPLA EXPOSIÇÃO, com duas imagens distintas mescladas harmoniosamente criando narrativa"
                " visual."
            ),
            EN: (
                "DOUBLE EXPOSURE, with two distinct images blended harmoniously into one visual narrative."
            ),
        },
        examples={
            PT: (
                "Um retrato em dupla exposição de um homem pensativo cujo perfil se mescla a uma floresta"
                " de pinheiros coberta de névoa, com raios de luz matinal filtrando entre os troncos e"
                " fundo monocromático.",
            ),
            EN: (
                "A double exposure portrait of a thoughtful man whose profile blends into a misty pine"
                " forest, morning light filtering between the trunks over a monochrome background.",
            ),
        },
    ),
    "analog": StyleTemplate(
        definition={
            PT: "ANALÓGICO/FILME, com grão visível, leve vazamento de luz, vinheta e cores de filme.",
            EN: "ANALOG/FILM, with visible grain, slight light leaks, vignetting and film colours.",
        },
        examples={
            PT: (
                "Um retrato analógico de um músico de jazz idoso em um clube esfumaçado, fotografado com"
                " Leica M6 em filme Tri-X 400, grão pronunciado e um único feixe de luz destacando o rosto.",
            ),
            EN: (
                "An analog portrait of an elderly jazz musician in a smoky club, shot on a Leica M6 with"
                " Tri-X 400 film, pronounced grain and a single beam of light on his face.",
            ),
        },
    ),
    "cyberpunk": StyleTemplate(
        definition={
            PT: "CYBERPUNK, com néons intensos, contraste extremo e atmosfera noturna chuvosa.",
            EN: "CYBERPUNK, with intense neon, extreme contrast and a rainy night atmosphere.",
        },
    ),
    "fantasy": StyleTemplate(
        definition={
            PT: "FANTASIA, com elementos mágicos, criaturas mitológicas e atmosfera mística.",
            EN: "FANTASY, with magical elements, mythological creatures and a mystical atmosphere.",
        },
    ),
    "surrealism": StyleTemplate(
        definition={
            PT: "SURREALISTA, com justaposições inesperadas, distorções da realidade e elementos oníricos.",
            EN: "SURREALIST, with unexpected juxtapositions, distortions of reality and dreamlike elements.",
        },
    ),
    "minimalist": StyleTemplate(
        definition={
            PT: "MINIMALISTA, com formas simplificadas, espaço negativo amplo e paleta limitada.",
            EN: "MINIMALIST, with simplified shapes, ample negative space and a limited palette.",
        },
    ),
}

GENERIC_STYLE_CLAUSE: Localized = {
    PT: " A imagem deve ter um estilo visual coerente e bem definido que melhor comunique a ideia central.",
    EN: " The image should have a coherent, well-defined visual style that best conveys the central idea.",
}


def mode_template(mode: Optional[PromptMode]) -> ModeTemplate:
    return MODE_TEMPLATES.get(mode, GENERAL_MODE) if mode else GENERAL_MODE


def style_template(image_style: Optional[str]) -> Optional[StyleTemplate]:
    if not image_style:
        return None
    return STYLE_TEMPLATES.get(image_style.strip().lower())


def lookup(
    mode: Optional[PromptMode], image_style: Optional[str], language: Language
) -> TemplateEntry:
    """Resolve the template text and example bank for (mode, style)."""
    mode_entry = mode_template(mode)
    template_text = mode_entry.fallback_clause[language]
    example_bank = mode_entry.examples.get(language, ())
    style_definition = None
    style_examples = False

    if mode == PromptMode.IMAGE_GENERATION and image_style:
        style = style_template(image_style)
        if style is None:
            template_text += GENERIC_STYLE_CLAUSE[language]
        else:
            style_definition = style.definition[language]
            prefix = " A imagem deve seguir o estilo " if language == PT else " The image must follow the style "
            template_text += f"{prefix}{style_definition}"
            # Style examples replace the generic mode examples
            style_bank = style.examples.get(language, ())
            if style_bank:
                example_bank = style_bank
                style_examples = True

    return TemplateEntry(
        template_text=template_text,
        example_bank=example_bank,
        required_phrase=mode_entry.required_phrase[language],
        style_definition=style_definition,
        style_examples=style_examples,
    )


# Offline topic ideas, served when no topics can be obtained from the model
TOPIC_IDEAS: Dict[PromptMode, Dict[Language, Tuple[str, ...]]] = {
    PromptMode.APP_CREATION: {
        PT: (
            "App de gestão de tarefas para equipes remotas",
            "App de controle de finanças pessoais com metas de economia",
            "App de agendamento para pequenos negócios",
        ),
        EN: (
            "Task management app for remote teams",
            "Personal finance tracker with savings goals",
            "Booking app for small businesses",
        ),
    },
    PromptMode.IMAGE_GENERATION: {
        PT: (
            "Castelo medieval ao amanhecer entre montanhas",
            "Cidade futurista com neon sob chuva",
            "Retrato de um chef em uma cozinha rústica",
        ),
        EN: (
            "Medieval castle at dawn among mountains",
            "Futuristic neon city in the rain",
            "Portrait of a chef in a rustic kitchen",
        ),
    },
    PromptMode.CONTENT_CREATION: {
        PT: (
            "Criação de conteúdo SEO para blog de tecnologia",
            "Série de posts sobre produtividade no trabalho remoto",
            "Newsletter semanal sobre IA generativa",
        ),
        EN: (
            "SEO content for a technology blog",
            "Post series on remote work productivity",
            "Weekly newsletter on generative AI",
        ),
    },
    PromptMode.PROBLEM_SOLVING: {
        PT: (
            "Reduzir o tempo de resposta do suporte ao cliente",
            "Organizar estudos para um concurso em três meses",
            "Diminuir o desperdício de estoque em um restaurante",
        ),
        EN: (
            "Reduce customer support response time",
            "Plan three months of exam preparation",
            "Cut inventory waste in a restaurant",
        ),
    },
    PromptMode.CODING: {
        PT: (
            "API REST em Python com autenticação JWT",
            "Script para análise de dados com pandas",
            "Componente React de formulário com validação",
        ),
        EN: (
            "Python REST API with JWT authentication",
            "Data analysis script with pandas",
            "React form component with validation",
        ),
    },
    PromptMode.INSTRUCT: {
        PT: (
            "Passo a passo para configurar um servidor web",
            "Guia para montar uma horta em apartamento",
            "Tutorial de preparação de pão caseiro",
        ),
        EN: (
            "Step by step web server setup",
            "Guide to an apartment vegetable garden",
            "Homemade bread tutorial",
        ),
    },
    PromptMode.EXPLAIN: {
        PT: (
            "Como funcionam os modelos de linguagem",
            "O que é computação em nuvem",
            "Como a inflação afeta o poder de compra",
        ),
        EN: (
            "How language models work",
            "What cloud computing is",
            "How inflation affects purchasing power",
        ),
    },
}


def topic_ideas(mode: PromptMode, language: Language) -> Tuple[str, ...]:
    return TOPIC_IDEAS[mode][language]
