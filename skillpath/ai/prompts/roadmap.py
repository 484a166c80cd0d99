# flake8: noqa: E501

"""Prompts for generating a learning roadmap tree and feedback on the request."""

from .base import Prompt

NO_CONTEXT = "No additional context"


class RoadmapPrompt(Prompt):
    """Asks for a three-level roadmap tree as JSON."""

    temperature = 0.4

    def __init__(self):
        system_prompt = (
            "You are an expert curriculum designer who builds clear, progressive learning roadmaps "
            "for technology topics."
        )

        template = """
Generate a long detailed learning roadmap containing at least 10 main categories. The roadmap must cover the timeframe of {timeframe} to learn {topic} at the {level} level, taking this context into account: "{context}".

Return a hierarchical JSON object with this structure:
{{
  "name": "{topic}",
  "children": [
    {{
      "name": "Main Category 1",
      "timeframe": "2 weeks",
      "children": [
        {{
          "name": "Subcategory 1.1",
          "children": [
            {{"name": "Topic 1.1.1"}},
            {{"name": "Topic 1.1.2"}}
          ]
        }}
      ]
    }}
  ]
}}

Requirements:
1. Exactly 3 levels below the root:
   - Level 1: Main categories (fundamental areas of knowledge), in logical learning order, one step each
   - Level 2: Subcategories (specific topics within each area)
   - Level 3: Individual topics (specific skills, tools or concepts)
2. Cover all essential topics, tools, frameworks and concepts required to learn {topic} in {timeframe} to the {level} level, including current industry practice.
3. Use clear, concise names (1-3 words). Do not include descriptions.
4. Every Level 1 node has a "timeframe" field with the time to spend on that step in days, weeks or months. No other node has a "timeframe".
5. Include only the hierarchical structure with names.
"""
        super().__init__(template=template, system_prompt=system_prompt)


class RoadmapFeedbackPrompt(Prompt):
    """Asks for a short plain-text note on how the request could be improved."""

    def __init__(self):
        system_prompt = "You are a supportive learning coach."

        template = """
The user has chosen the topic "{topic}" to learn at "{level}" level within "{timeframe}". They also added: "{context}".

Provide a short helpful note to the user in one paragraph covering:
- Whether their goal and level align well with the timeframe
- Any potential improvements in how they structured their query
- Suggestions for better outcomes, learning tips, better time commitment or extra tools to consider

Use plain text only, without symbols or formatting. Limit the response to 6-7 sentences. Be direct, clear and supportive.
"""
        super().__init__(template=template, system_prompt=system_prompt)
