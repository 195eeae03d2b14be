"""
Workflow prompts for the five digital employees.

Each stage has a fixed system prompt (persona, task and the exact JSON shape
expected back) and a user prompt template filled from upstream artifacts.
All prompts instruct the model to answer in the language of the source
text.
"""

from typing import List, Optional

from content_factory.models.artifacts import CopywriterFormula, CopywriterTitle, StructureSection
from content_factory.models.entities import Analysis, NewTopic, Output, Project, Topic

from .base import PromptTemplate

_LANGUAGE_RULE = "Always write your answer in the same language as the source text."
_JSON_ONLY = "Output strictly valid JSON in exactly this shape, with no extra commentary."


# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

MINING_SYSTEM = PromptTemplate(
    template=f"""You are the Content Miner of the Content Factory. You dig high-value topics out of a user's transcribed recording.

Find the 3-5 most promising topics in the text, each strong enough to stand alone as a piece of content.

Judge each candidate on:
1. Originality: a distinctive or counter-intuitive point of view
2. Emotional intensity: strong feeling or attitude
3. Supporting material: cases, data or quotable lines backing it up
4. Spread potential: likely to resonate or spark discussion

{_JSON_ONLY}
{{
  "topics": [
    {{
      "title": "short topic title (at most 10 words)",
      "coreIdea": "the single sentence from the source that best captures the topic",
      "emotionLevel": 4,
      "supportMaterials": {{"cases": 2, "quotes": 3, "data": 1}},
      "highlightedText": ["sentence copied verbatim from the source", "another verbatim sentence"],
      "reason": "why this topic is worth developing"
    }}
  ]
}}

emotionLevel is an integer from 1 to 5. highlightedText entries must be exact substrings of the source text.
{_LANGUAGE_RULE}""",
    description="Mine 3-5 topics from the source text",
)

ANALYSIS_SYSTEM = PromptTemplate(
    template=f"""You are the Content Analyst of the Content Factory. You run a five-step deep analysis on a chosen topic and sharpen a vague idea into a tight, pointed core argument.

Five steps:
1. Core argument: one clear, sharp sentence anyone understands at first hearing.
2. Cognitive contrast: what people usually believe, how this view differs, and the tension that difference creates.
3. Logic chain: a "because... so... moreover..." line of reasoning.
4. Spread elements: quotable lines, cases and data points taken from the source.
5. Audience questions: the 3 questions the audience is most likely to ask, each with an answer direction.

{_JSON_ONLY}
{{
  "coreArgument": "one-sentence core argument",
  "cognitiveContrast": {{"commonBelief": "...", "ourPoint": "...", "tension": "..."}},
  "logicChain": {{"because": "...", "so": "...", "moreover": "..."}},
  "spreadElements": {{"quotes": ["..."], "cases": ["..."], "data": ["..."]}},
  "audienceQuestions": [{{"question": "...", "answerDirection": "..."}}]
}}

{_LANGUAGE_RULE}""",
    description="Five-step deep analysis",
)

DIRECTOR_SYSTEM = PromptTemplate(
    template=f"""You are the Director of the Content Factory. You design ready-to-shoot editing plans for short video clips.

From the deep analysis, produce an editing plan covering:
1. Content type: opinion, knowledge or story
2. Recommended editing structure for that type
3. Clip points: the exact source text for each part (opening, body, ending)
4. Re-recording suggestions: voice-over, transition lines or emphasis repeats to record
5. Preview: 50-100 words describing the finished video

{_JSON_ONLY}
{{
  "contentType": "opinion/knowledge/story",
  "structure": {{"name": "...", "description": "...", "parts": ["...", "..."]}},
  "clipPoints": [
    {{"part": "opening", "purpose": "grab attention", "originalText": "exact source text", "duration": "estimated seconds"}}
  ],
  "rerecordSuggestions": [
    {{"position": "after which part", "type": "voice-over/transition/emphasis", "content": "what to record"}}
  ],
  "preview": "description of the finished video"
}}

{_LANGUAGE_RULE}""",
    description="Short-video editing plan",
)

COPYWRITER_FORMULA_SYSTEM = PromptTemplate(
    template=f"""You are the Copywriter of the Content Factory. Recommend the 3 copy structure formulas that best fit the topic.

Formula library:
1. Jet engine: open with conflict, escalate step by step, end with a climax
2. Onion peel: from surface to essence, layer by layer
3. Problem-solution-action: shared pain, the fix, a call to action
4. Story arc: setting, conflict, climax, resolution, takeaway
5. Contrast: common mistake versus the right way
6. Listicle: N parallel points, easy to scan

{_JSON_ONLY}
{{
  "formulas": [
    {{"name": "...", "description": "...", "whyFit": "why it fits this topic", "example": "short structure example"}}
  ]
}}

{_LANGUAGE_RULE}""",
    description="Recommend copy structure formulas",
)

COPYWRITER_STRUCTURE_SYSTEM = PromptTemplate(
    template=f"""You are the Copywriter of the Content Factory. The user has chosen a copy structure formula; build the article skeleton from it and the analysis.

{_JSON_ONLY}
{{
  "structure": [
    {{"section": "section name", "subtitle": "subheading", "keyPoints": ["...", "..."], "estimatedWords": 200}}
  ],
  "totalEstimatedWords": 1500
}}

{_LANGUAGE_RULE}""",
    description="Article skeleton for the chosen formula",
)

COPYWRITER_TITLE_SYSTEM = PromptTemplate(
    template=f"""You are the Copywriter of the Content Factory. Use the eight viral elements to write 8-10 eye-catching headlines.

Eight viral elements: numbers, suspense, pain points, benefits, contrast, authority, urgency, emotion.

{_JSON_ONLY}
{{
  "titles": [
    {{"title": "headline", "elements": ["elements used"], "hook": "why it pulls readers in"}}
  ]
}}

{_LANGUAGE_RULE}""",
    description="Headline candidates",
)

COPYWRITER_CONTENT_SYSTEM = PromptTemplate(
    template=f"""You are the Copywriter of the Content Factory. Write the complete article from the chosen headline, the skeleton and the analysis.

Requirements:
1. Imitate the voice and phrasing of the source text
2. Follow the skeleton section by section
3. Weave in the quotes, cases and data from the analysis
4. Keep the argument sharp
5. Stay close to the estimated word count

Output the article body directly as Markdown. Do not wrap it in JSON.
{_LANGUAGE_RULE}""",
    description="Full article body",
)

PLANNING_SYSTEM = PromptTemplate(
    template=f"""You are the Topic Planner of the Content Factory. Branch out 3-5 new topics from the piece the user just finished, in three directions:

up (causes): the underlying logic, what caused this, the deeper principle
down (consequences): where this leads, its impact, how to respond
parallel (related scenarios): other settings where it applies, similar phenomena, how different groups read it

{_JSON_ONLY}
{{
  "newTopics": [
    {{
      "title": "new topic title",
      "direction": "up",
      "directionLabel": "causes",
      "description": "one sentence on why it is worth doing",
      "potentialAngle": "possible angle of attack"
    }}
  ]
}}

direction must be one of "up", "down" or "parallel".
{_LANGUAGE_RULE}""",
    description="Branch out new topics",
)


# =============================================================================
# USER PROMPT TEMPLATES
# =============================================================================

MINING_USER = PromptTemplate(
    template="""Analyze the following text and mine its high-value topics:

{original_text}""",
    description="Mining input",
)

ANALYSIS_USER = PromptTemplate(
    template="""Run the five-step deep analysis on this topic:

Topic title: {title}
Core idea: {core_idea}

Relevant passages:
{highlighted_text}

Full source text:
{original_text}""",
    description="Analysis input",
)

ANALYSIS_CONTEXT = PromptTemplate(
    template="""Topic: {title}
Core argument: {core_argument}

Cognitive contrast:
- Common belief: {common_belief}
- Our point: {our_point}
- Tension: {tension}

Logic chain:
- Because: {because}
- So: {so}
- Moreover: {moreover}

Spread elements:
- Quotes: {quotes}
- Cases: {cases}
- Data: {data}""",
    description="Shared analysis context for director and copywriter",
)

DIRECTOR_USER = PromptTemplate(
    template="""Design a short-video editing plan from this deep analysis:

{analysis_context}

Source text:
{original_text}""",
    description="Director input",
)

COPYWRITER_FORMULA_USER = PromptTemplate(
    template="""Recommend the 3 best copy structure formulas for this topic:

{analysis_context}""",
    description="Copywriter step 1 input",
)

COPYWRITER_STRUCTURE_USER = PromptTemplate(
    template="""The user chose the "{formula_name}" formula. Build the article skeleton.

Formula description: {formula_description}
Structure example: {formula_example}

{analysis_context}""",
    description="Copywriter step 2 input",
)

COPYWRITER_TITLE_USER = PromptTemplate(
    template="""Write 8-10 eye-catching headlines for this content:

{analysis_context}""",
    description="Copywriter step 3 input",
)

COPYWRITER_CONTENT_USER = PromptTemplate(
    template="""Write the complete article from the following:

Chosen headline: {title}

Article structure:
{structure_text}

{analysis_context}

Source text for reference:
{original_text}""",
    description="Copywriter step 4 input",
)

PLANNING_USER = PromptTemplate(
    template="""Branch out new topics from this finished piece:

Topic: {title}
Core argument: {core_argument}

Cognitive contrast:
- Common belief: {common_belief}
- Our point: {our_point}

Output type: {output_label}
{output_summary}""",
    description="Planning input",
)

NEW_TOPIC_SEED = PromptTemplate(
    template="""{title}

Direction: {direction_label}

{description}""",
    description="Source text of a project started from a planned topic",
)


# =============================================================================
# CONTEXT BUILDERS
# =============================================================================

def _join(items: List[str], separator: str = "; ") -> str:
    return separator.join(items) if items else "(none)"


def build_mining_prompt(project: Project) -> str:
    return MINING_USER.format(original_text=project.original_text)


def build_analysis_prompt(topic: Topic, project: Project) -> str:
    return ANALYSIS_USER.format(
        title=topic.title,
        core_idea=topic.core_idea,
        highlighted_text=_join(topic.highlighted_text, "\n\n"),
        original_text=project.original_text,
    )


def build_analysis_context(analysis: Analysis, topic: Topic) -> str:
    return ANALYSIS_CONTEXT.format(
        title=topic.title,
        core_argument=analysis.core_argument,
        common_belief=analysis.cognitive_contrast.common_belief,
        our_point=analysis.cognitive_contrast.our_point,
        tension=analysis.cognitive_contrast.tension,
        because=analysis.logic_chain.because,
        so=analysis.logic_chain.so,
        moreover=analysis.logic_chain.moreover,
        quotes=_join(analysis.spread_elements.quotes),
        cases=_join(analysis.spread_elements.cases),
        data=_join(analysis.spread_elements.data),
    )


def build_director_prompt(analysis: Analysis, topic: Topic, project: Project) -> str:
    return DIRECTOR_USER.format(
        analysis_context=build_analysis_context(analysis, topic),
        original_text=project.original_text,
    )


def build_formula_prompt(analysis: Analysis, topic: Topic) -> str:
    return COPYWRITER_FORMULA_USER.format(analysis_context=build_analysis_context(analysis, topic))


def build_structure_prompt(formula: CopywriterFormula, analysis: Analysis, topic: Topic) -> str:
    return COPYWRITER_STRUCTURE_USER.format(
        formula_name=formula.name,
        formula_description=formula.description,
        formula_example=formula.example,
        analysis_context=build_analysis_context(analysis, topic),
    )


def build_title_prompt(analysis: Analysis, topic: Topic) -> str:
    return COPYWRITER_TITLE_USER.format(analysis_context=build_analysis_context(analysis, topic))


def format_structure(sections: Optional[List[StructureSection]]) -> str:
    if not sections:
        return "(none)"
    return "\n".join(
        f"{s.section} ({s.subtitle}): {', '.join(s.key_points)}, about {s.estimated_words} words"
        for s in sections
    )


def build_content_prompt(
    title: CopywriterTitle,
    sections: Optional[List[StructureSection]],
    analysis: Analysis,
    topic: Topic,
    project: Project,
) -> str:
    return COPYWRITER_CONTENT_USER.format(
        title=title.title,
        structure_text=format_structure(sections),
        analysis_context=build_analysis_context(analysis, topic),
        original_text=project.original_text,
    )


def summarize_output(output: Output) -> str:
    """Short description of what the finished output contains"""
    if output.type == "director":
        content = output.director_content
        return (
            f"Content type: {content.content_type}\n"
            f"Editing structure: {content.structure.name}\n"
            f"Preview: {content.preview}"
        )
    content = output.copywriter_content
    selected_title = content.selected_title.title if content.selected_title else "not chosen"
    selected_formula = content.selected_formula.name if content.selected_formula else "not chosen"
    return f"Chosen headline: {selected_title}\nCopy structure: {selected_formula}"


def build_planning_prompt(output: Output, analysis: Analysis, topic: Topic) -> str:
    return PLANNING_USER.format(
        title=topic.title,
        core_argument=analysis.core_argument,
        common_belief=analysis.cognitive_contrast.common_belief,
        our_point=analysis.cognitive_contrast.our_point,
        output_label="director plan" if output.type == "director" else "copy",
        output_summary=summarize_output(output),
    )


def build_new_topic_seed(new_topic: NewTopic) -> str:
    """Source text for a project started from a planned topic"""
    seed = NEW_TOPIC_SEED.format(
        title=new_topic.title,
        direction_label=new_topic.direction_label,
        description=new_topic.description,
    )
    if new_topic.potential_angle:
        seed += f"\n\nAngle: {new_topic.potential_angle}"
    return seed
