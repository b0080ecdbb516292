"""
Static diagnosis table served by the mock analyzer.

Entries are never modified at serve time; the diagnosis service deep-copies
the chosen entry before jittering its confidence.
"""

SEVERITY_LEVELS = ("none", "low", "medium", "high")

MOCK_DIAGNOSES = (
    {
        "disease": {
            "name": "Tomato Late Blight",
            "scientificName": "Phytophthora infestans",
            "confidence": 0.92,
            "description": (
                "A devastating disease that affects tomato plants, causing dark brown to black "
                "lesions on leaves, stems, and fruit. The disease spreads rapidly in cool, wet conditions."
            ),
        },
        "recommendations": [
            "Remove and destroy infected plants immediately",
            "Apply copper-based fungicide to remaining plants",
            "Improve air circulation between plants",
            "Water at the base of plants to keep foliage dry",
            "Consider crop rotation next season",
        ],
        "severity": "high",
        "isHealthy": False,
    },
    {
        "disease": {
            "name": "Powdery Mildew",
            "scientificName": "Erysiphales",
            "confidence": 0.85,
            "description": (
                "A fungal disease that appears as white powdery spots on leaves and stems. "
                "Common in warm, dry climates with high humidity at night."
            ),
        },
        "recommendations": [
            "Remove affected leaves and dispose of properly",
            "Spray with neem oil or baking soda solution",
            "Ensure proper plant spacing for airflow",
            "Avoid overhead watering",
        ],
        "severity": "medium",
        "isHealthy": False,
    },
    {
        "disease": {
            "name": "Bacterial Leaf Spot",
            "scientificName": "Xanthomonas campestris",
            "confidence": 0.78,
            "description": (
                "A bacterial infection causing small, dark, water-soaked spots on leaves. "
                "Can spread rapidly in warm, humid conditions."
            ),
        },
        "recommendations": [
            "Remove infected plant parts",
            "Apply copper-based bactericide",
            "Avoid working with plants when wet",
            "Improve drainage and reduce humidity",
        ],
        "severity": "medium",
        "isHealthy": False,
    },
    {
        "disease": {
            "name": "Early Blight",
            "scientificName": "Alternaria solani",
            "confidence": 0.88,
            "description": (
                "A common fungal disease causing dark spots with concentric rings on lower leaves "
                "first, then spreading upward."
            ),
        },
        "recommendations": [
            "Remove and destroy infected leaves",
            "Apply fungicide containing chlorothalonil",
            "Mulch around plants to prevent soil splash",
            "Ensure proper plant spacing",
        ],
        "severity": "medium",
        "isHealthy": False,
    },
    {
        "disease": {
            "name": "Healthy Plant",
            "scientificName": None,
            "confidence": 0.95,
            "description": (
                "Your plant appears to be healthy! Continue with your current care routine "
                "to maintain its health."
            ),
        },
        "recommendations": [
            "Continue regular watering schedule",
            "Maintain current fertilization routine",
            "Monitor regularly for any changes",
            "Ensure adequate sunlight exposure",
        ],
        "severity": "none",
        "isHealthy": True,
    },
)
