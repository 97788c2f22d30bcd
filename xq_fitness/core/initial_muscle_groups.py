"""
Справочник групп мышц, которым заполняется пустая БД.
"""

INITIAL_MUSCLE_GROUPS = [
    {"name": "Chest", "description": "Pectoralis major and minor muscles"},
    {"name": "Back", "description": "Latissimus dorsi, rhomboids and trapezius"},
    {"name": "Shoulders", "description": "Anterior, lateral and posterior deltoids"},
    {"name": "Biceps", "description": "Biceps brachii and brachialis"},
    {"name": "Triceps", "description": "Triceps brachii"},
    {"name": "Quadriceps", "description": "Front of the thigh"},
    {"name": "Hamstrings", "description": "Back of the thigh"},
    {"name": "Glutes", "description": "Gluteus maximus, medius and minimus"},
    {"name": "Calves", "description": "Gastrocnemius and soleus"},
    {"name": "Core", "description": "Abdominals and obliques"},
]
