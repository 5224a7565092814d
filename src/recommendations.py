# src/recommendations.py
from html import escape

from models import ProtectiveMeasure, RiskTier, SkinType

# Tabela de níveis UV: rótulo, cor, mensagem
RISK_TIER_TEXT = {
    RiskTier.LOW: {
        "label": "Low",
        "color": "green",
        "advisory": "Have fun outside!",
    },
    RiskTier.MODERATE: {
        "label": "Moderate",
        "color": "yellow",
        "advisory": "SPF is your BFF, cover up and use sunscreen!",
    },
    RiskTier.HIGH: {
        "label": "High",
        "color": "orange",
        "advisory": "Sunburns are so last season, protect yourself and reduce your sun-time!",
    },
    RiskTier.VERY_HIGH: {
        "label": "Very High",
        "color": "red",
        "advisory": "Avoid the Lobster Look, use sunscreen every 2 hours and minimise sun exposure!",
    },
    RiskTier.EXTREME: {
        "label": "Extreme",
        "color": "purple",
        "advisory": "UV off the Charts! You should be off the sun!",
    },
}

MEASURE_TEXT = {
    ProtectiveMeasure.SUNGLASSES: "Use sunglasses",
    ProtectiveMeasure.SUNSCREEN: "Wear sunscreen",
    ProtectiveMeasure.HAT: "Wear a hat",
    ProtectiveMeasure.PROTECTIVE_CLOTHING: "Wear protective clothing",
    ProtectiveMeasure.SHADE: "Stay in shade",
    ProtectiveMeasure.REDUCED_EXPOSURE_TIME: "Reduce time in the sun",
    ProtectiveMeasure.AVOID_SUN: "Avoid the sun",
}

SKIN_TYPE_TEXT = {
    SkinType.TYPE1: {
        "label": "Fitzpatrick Type I: Pale white skin",
        "color": "#FFE3E3",
    },
    SkinType.TYPE2: {
        "label": "Fitzpatrick Type II: White skin",
        "color": "#FFD8C4",
    },
    SkinType.TYPE3: {
        "label": "Fitzpatrick Type III: White to olive skin",
        "color": "#E5B887",
    },
    SkinType.TYPE4: {
        "label": "Fitzpatrick Type IV: Olive skin",
        "color": "#C99364",
    },
    SkinType.TYPE5: {
        "label": "Fitzpatrick Type V: Brown skin",
        "color": "#8D5524",
    },
    SkinType.TYPE6: {
        "label": "Fitzpatrick Type VI: Dark brown to black skin",
        "color": "#413333",
    },
}

REAPPLY_EASY_BURNER = "Easy burner! Reapply every 1-2 hours."
REAPPLY_MODERATE = "Stay sun-safe! Reapply every 2-3 hours."
REAPPLY_RESISTANT = "Better protected, but still reapply every 2-3 hours!"

REAPPLY_ADVICE = {
    SkinType.TYPE1: REAPPLY_EASY_BURNER,
    SkinType.TYPE2: REAPPLY_EASY_BURNER,
    SkinType.TYPE3: REAPPLY_MODERATE,
    SkinType.TYPE4: REAPPLY_MODERATE,
    SkinType.TYPE5: REAPPLY_RESISTANT,
    SkinType.TYPE6: REAPPLY_RESISTANT,
}

# Quantidade de protetor para o corpo inteiro
SUNSCREEN_APPLICATION = [
    ("Face and neck", "1 teaspoon"),
    ("Each arm", "1 teaspoon"),
    ("Chest and abdomen", "2 teaspoons"),
    ("Back", "2 teaspoons"),
    ("Each leg", "2 teaspoons"),
]
SUNSCREEN_TOTAL = "~10 teaspoons for full body coverage"


def get_recommendations(risk, sensitivity=None):
    """Ordered advice list for a UV classification and, optionally, a skin result."""
    recommendations = [f"Risk: {risk.label}", risk.advisory_text]
    recommendations += [MEASURE_TEXT[m] for m in risk.measures]

    if sensitivity is not None:
        recommendations.append(sensitivity.label)
        recommendations.append(sensitivity.reapply_advice)
        recommendations += [f"{area}: {amount}" for area, amount in SUNSCREEN_APPLICATION]
        recommendations.append(f"Total: {SUNSCREEN_TOTAL}")

    return recommendations


def format_analysis_html(risk, sensitivity, recommendations):
    #Gera bloco HTML estruturado para exibir:
    #- Índice UV
    #- Tipo de Pele (quando houver)
    #- Lista de Recomendações
    html = f"<p><strong>UV Index:</strong> {risk.uv_index}</p>"
    html += f'<p><strong>Risk:</strong> <span style="color:{risk.color}">{escape(risk.label)}</span></p>'
    if sensitivity is not None:
        html += f"<p><strong>Skin Type:</strong> {escape(sensitivity.label)}</p>"
    html += "<p><strong>Recommendations:</strong></p><ul>"
    for rec in recommendations:
        html += f"<li>{escape(rec)}</li>"
    html += "</ul>"
    return html
