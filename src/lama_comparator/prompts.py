import json
from typing import Any, Dict


def _metrics_line(product: Dict[str, Any]) -> str:
    parts = []
    if product.get("mean_stars") is not None:
        parts.append(f"media {product['mean_stars']} estrellas")
    if product.get("n_reviews") is not None:
        parts.append(f"{product['n_reviews']} reviews")
    if product.get("prob_chasco") is not None:
        parts.append(f"probabilidad de chasco {product['prob_chasco']}")
    return ", ".join(parts)


def build_metrics_prompt(product_a: Dict[str, Any], product_b: Dict[str, Any]) -> str:
    record_a = json.dumps(product_a, ensure_ascii=False, indent=2)
    record_b = json.dumps(product_b, ensure_ascii=False, indent=2)

    return f"""
Eres un analista de TheLamaNest que compara productos usando solo datos estadisticos de reviews.

Te doy las fichas Lama de dos productos (A y B) en formato JSON. Campos relevantes:
mean_stars (media de estrellas), n_reviews (numero de reviews), stars_pct (distribucion de estrellas),
lama_lb95 y lama_ub95 (intervalo de confianza del 95%), prob_chasco (probabilidad de decepcion),
fecha_ultima_review, top_pros, top_contras y tags_tematica.

Tu tarea:
1. Comparar ambos productos en 5-8 lineas en espanol, texto plano sin markdown.
2. Apoyarte en los numeros: fiabilidad del intervalo, probabilidad de chasco y volumen de reviews.
3. Mencionar el pro y el contra mas determinante de cada uno.
4. Terminar diciendo cual elegirias para la mayoria de usuarios y por que.

Producto A:
{record_a}

Producto B:
{record_b}

Escribe ahora la comparativa:
""".strip()


def build_narrative_prompt(
    product_a: Dict[str, Any],
    product_b: Dict[str, Any],
    blog_a: str,
    blog_b: str,
) -> str:
    metrics_a = _metrics_line(product_a)
    metrics_b = _metrics_line(product_b)

    return f"""
Eres una IA experta en ayudar a usuarios a elegir entre dos productos de consumo basandote en las meta-reviews largas de TheLamaNest.

Tu tarea:
1. Leer el contexto de ambos productos (solo a partir de los textos que te doy).
2. Escribir SOLO un parrafo corto (6-10 lineas maximo), claro y directo, en el idioma de los textos.
3. Explicar para quien encaja mejor el producto A y para quien encaja mejor el producto B.
4. Cerrar con una mini-conclusion persuasiva, sin sonar agresivo: si tuvieras que elegir uno para la mayoria de usuarios, cual seria y por que.
5. No copies frases largas de los textos; sintetiza lo que mas influye en la decision.
6. No uses formato markdown, solo texto plano.

Producto A:
ASIN: {product_a.get('asin', '')}
Nombre: {product_a.get('nombre_producto') or ''}
Metricas: {metrics_a or 'no disponibles'}

Texto del blog A:
-----------------
{blog_a}

Producto B:
ASIN: {product_b.get('asin', '')}
Nombre: {product_b.get('nombre_producto') or ''}
Metricas: {metrics_b or 'no disponibles'}

Texto del blog B:
-----------------
{blog_b}

Ahora escribe la comparativa breve y tu recomendacion final.
""".strip()
