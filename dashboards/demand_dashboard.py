"""
Dashboard de Pronóstico: Demanda de Hemocomponentes (Próximos 7 Días)

Dashboard Streamlit que muestra el histórico sintético de 31 días, el
pronóstico recursivo de 7 días, tres tarjetas de resumen y las
recomendaciones de colecta.

MODO AUTOMÁTICO: No requiere interacción. Cada sesión genera su propio
histórico y entrena el modelo una sola vez.

Uso:
    streamlit run dashboards/demand_dashboard.py
"""

import logging
import sys
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from blood_forecast.prediction.forecaster import ForecastPipeline
from blood_forecast.series import to_frame

# Configurar logging
logging.basicConfig(level=logging.WARNING)

SESSION_KEY = 'forecast_result'

# Configuración de página
st.set_page_config(
    page_title="Blood Products Demand Forecasting",
    page_icon="🩸",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Estilos
st.markdown("""
<style>
    .main-header {
        font-size: 2rem;
        font-weight: bold;
        color: #4F46E5;
        padding: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)


# ============================================================================
# FUNCIONES DE CARGA
# ============================================================================

def get_session_result():
    """Ejecuta el pipeline una vez por sesión y reutiliza el resultado en los reruns"""
    if SESSION_KEY not in st.session_state:
        with st.spinner("🧠 Entrenando modelo y generando pronóstico..."):
            st.session_state[SESSION_KEY] = ForecastPipeline().run()
    return st.session_state[SESSION_KEY]


# ============================================================================
# FUNCIONES DE VISUALIZACIÓN
# ============================================================================

def plot_demand_forecast(df: pd.DataFrame):
    """Gráfica de demanda observada (línea continua) y pronosticada (punteada)"""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=df['label'],
        y=df['actual'].astype('float'),
        mode='lines+markers',
        name='Actual Demand',
        line=dict(color='#4F46E5', width=2),
        marker=dict(size=4),
        hovertemplate='<b>%{x}</b><br>Actual: %{y:,.0f} units<extra></extra>'
    ))

    fig.add_trace(go.Scatter(
        x=df['label'],
        y=df['predicted'].astype('float'),
        mode='lines+markers',
        name='Predicted Demand',
        line=dict(color='#059669', width=2, dash='dash'),
        marker=dict(size=4),
        hovertemplate='<b>%{x}</b><br>Predicted: %{y:,.0f} units<extra></extra>'
    ))

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Units",
        hovermode='x unified',
        height=400,
        margin=dict(t=5, r=30, l=20, b=5),
        showlegend=True
    )
    return fig


# ============================================================================
# APLICACIÓN PRINCIPAL (AUTOMÁTICA)
# ============================================================================

def main():
    """Aplicación principal - MODO AUTOMÁTICO"""

    st.markdown('<p class="main-header">🧠 Blood Products Demand Forecasting</p>',
                unsafe_allow_html=True)

    try:
        result = get_session_result()
    except Exception as e:
        st.error(f"❌ Error al generar el pronóstico: {e}")
        st.stop()

    summary = result.summary

    # Tarjetas de resumen
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("📈 Current Demand", f"{summary.current_demand} units")
    with col2:
        st.metric("📊 Predicted Peak", f"{summary.predicted_peak} units")
    with col3:
        st.metric("📅 Forecast Period", f"{summary.forecast_days} days")

    st.markdown("---")

    st.subheader("Demand Forecast Chart")
    st.plotly_chart(plot_demand_forecast(to_frame(result.combined)), use_container_width=True)

    st.markdown("---")

    st.subheader("🩸 Recommendations")
    st.markdown("\n".join(f"- {line}" for line in summary.recommendations))


if __name__ == "__main__":
    main()
