"""
Static game content templates
"""

# Default grid seeded for a new game when the creator asks for a template
EMPTY_GAME_TEMPLATE = {
    "categories": [
        {"name": "Category 1", "order": 0},
        {"name": "Category 2", "order": 1},
        {"name": "Category 3", "order": 2},
        {"name": "Category 4", "order": 3},
        {"name": "Category 5", "order": 4},
    ],
    "question_rows": [
        {"value": 100, "order": 0},
        {"value": 200, "order": 1},
        {"value": 300, "order": 2},
        {"value": 400, "order": 3},
        {"value": 500, "order": 4},
    ],
    "empty_question": {"question": "", "answer": ""},
}

JEOPARDY_PROMPT = """Generate a Jeopardy-style game data structure with the following specifications:

Language: {{language}}
Number of categories: {{numCategories}}
Questions per category: {{numQuestions}}
Topic: {{topic}}

Technical requirements:
1. Output ONLY a valid JSON object with no Markdown formatting
2. Return a complete object with an array of category objects under the key "categories"
3. Each category object should have:
   - id: a unique numeric identifier
   - name: the category name
   - questions: an array of question objects, ordered from easiest to hardest
4. Each question object should have:
   - id: a unique numeric identifier
   - clue: the statement shown to players
   - answer: the direct answer as a simple noun or phrase (NO "What is" format)
   - difficulty: a number from 1-5 representing question difficulty
5. Make sure the output can be parsed directly with a JSON parser
6. Do not include any explanation, comments or backticks in the output"""
