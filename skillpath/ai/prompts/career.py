# flake8: noqa: E501

"""Prompt for simulating a career progression path."""

from .base import Prompt


class CareerPathPrompt(Prompt):
    """Asks for a JSON array of career steps, coaching feedback on the first."""

    temperature = 0.5

    def __init__(self):
        system_prompt = "You are a career coaching AI specialized in tech career progression paths."

        template = """
Create a career progression timeline for someone with these characteristics:

User details:
{user_details}

Generate a realistic career path from their current position to their goal. Each step shows:
1. The job title they can achieve
2. The months required to reach that position, based on their time commitment
3. The skills needed to qualify for that position
4. A brief description of the role
5. Recommended learning resources or certification paths

Include an "aiFeedback" field in the FIRST object only: a personalised coaching message (50-100 words) assessing their current position against their goal, the strengths they can leverage, the biggest gaps, immediate action items, and encouragement.

Respond with a JSON array where each object is a career stage:
[
  {{
    "title": "Position Title (maximum 4 words)",
    "timeToAchieve": number_of_months,
    "requiredSkills": ["Skill 1", "Skill 2"],
    "description": "Brief description of the role and responsibilities",
    "learningResources": ["Resource 1", "Resource 2"],
    "aiFeedback": "Only in the first object"
  }}
]

Guidelines:
- Include as many steps as necessary to reach the goal
- Match the requested timeframe: {goal_timeframe}
- Be realistic about time requirements for a commitment of {hours_per_week} hours per week
- Account for their career stage ({career_stage}) and education ({education_level})
- If they are currently studying ({currently_studying}), factor that into the timeline
- Consider their field of study ({major}) and work experience ({experience})
- Build gradually on existing skills; make each step achievable but challenging
"""
        super().__init__(template=template, system_prompt=system_prompt)
