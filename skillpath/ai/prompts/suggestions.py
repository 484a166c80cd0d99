# flake8: noqa: E501

"""Prompt for the personalised learning guide built from questionnaire answers."""

from .base import Prompt


class SuggestionPrompt(Prompt):
    """Asks for an HTML learning guide following a fixed section layout."""

    def __init__(self):
        system_prompt = (
            "You are a professional career guidance expert specialized in creating personalized tech "
            "learning roadmaps."
        )

        template = """
Create a comprehensive, actionable and structured learning guide tailored to this user.

USER PROFILE:
- Career Goal: {career_goals}
- Experience Level: {experience}
- Learning Preference: {learning_style}
- Time Commitment: {time_commitment}
- Current Knowledge: {current_knowledge}
- Development Preference: {preference}

OUTPUT REQUIREMENTS:
1. Respond with HTML only, without markdown or code blocks
2. Follow exactly the HTML structure below and fill each section with personalised content
3. Use only these tags: h1, h2, h3, p, ul, ol, li, strong, em, section, div, span
4. Close every tag

HTML STRUCTURE:
<h1>Personalized {career_goals} Learning Roadmap</h1>

<section>
  <h2>Your Learning Profile</h2>
  <p>[Overview of the user's background and goals, and how this roadmap addresses them]</p>
  <h3>Personalized Assessment</h3>
  <ul>
    <li><strong>Current Strengths:</strong> [Based on their current knowledge]</li>
    <li><strong>Areas to Develop:</strong> [Key skills they need]</li>
    <li><strong>Time Optimization:</strong> [Strategies for a {time_commitment} weekly commitment]</li>
    <li><strong>Learning Approach:</strong> [Tailored to a {learning_style} preference]</li>
  </ul>
</section>

<section>
  <h2>Essential Skills Foundation</h2>
  <div class="essential-skills-container">
    <span class="essential-skill-badge">SkillName</span>
    [8-12 essential skills as skill badges]
  </div>
  <h3>Core Fundamentals</h3>
  <ul>
    <li><strong>[Fundamental]:</strong> [Brief description]</li>
  </ul>
</section>

<section>
  <h2>Learning Phases</h2>
  <h3>Phase 1: Phase Name (X weeks)</h3>
  <p>[Description of this phase tailored to experience level]</p>
  <ul>
    <li><strong>Key Focus:</strong> [Main skills and concepts]</li>
    <li><strong>Learning Materials:</strong> [Resources matching their learning style]</li>
    <li><strong>Practical Project:</strong> [A specific project idea with scope]</li>
    <li><strong>Success Metrics:</strong> [How to know when to advance]</li>
  </ul>
  [More phases as required by experience level and time commitment]
</section>

<section>
  <h2>Technology Stack Recommendations</h2>
  <h3>Primary Technologies</h3>
  <ul>
    <li><strong>[Technology]:</strong> [Why it is relevant to their goals]</li>
  </ul>
  <h3>Complementary Tools</h3>
  <ul>
    <li><strong>[Tool]:</strong> [Brief description and purpose]</li>
  </ul>
</section>

<section>
  <h2>Curated Learning Resources</h2>
  <h3>For Your {learning_style} Learning Style</h3>
  <ul>
    <li><strong>[Resource Name]:</strong> [Brief description] - [What makes it valuable]</li>
  </ul>
</section>

Link everything back to their career goal of becoming a {career_goals}. For advanced users, go deeper into specialized topics.
"""
        super().__init__(template=template, system_prompt=system_prompt)
