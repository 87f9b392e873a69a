"""
Chart generation utilities using Plotly.
Every builder returns an HTML fragment (no bundled plotly.js) ready to be
dropped into the results page.
"""
import plotly.graph_objects as go
from plotly.subplots import make_subplots
import pandas as pd
from typing import Dict, Any, List, Optional

from .config import METRIC_COLUMNS, NUMERIC_FEATURES, TARGET_COLUMN
from .eda import correlation_long
from .evaluation import is_undefined

COLORS = ['#1FB8CD', '#FF6B6B', '#4ECDC4', '#45B7D1', '#96CEB4', '#FECA57']

PLOT_CONFIG = {
    'displayModeBar': True,
    'displaylogo': False,
    'modeBarButtonsToRemove': ['pan2d', 'lasso2d', 'select2d'],
    'responsive': True
}


def _placeholder(message: str) -> str:
    return f"<div class='chart-placeholder'>{message}</div>"


def _to_html(fig: go.Figure, div_id: str) -> str:
    return fig.to_html(full_html=False, include_plotlyjs=False, config=PLOT_CONFIG, div_id=div_id)


def create_feature_boxplots(df: pd.DataFrame, features: Optional[List[str]] = None,
                            target: str = TARGET_COLUMN) -> str:
    """One box plot panel per feature, a box per Target class."""
    if df.empty or target not in df.columns:
        return _placeholder("No data available for box plots")

    features = features or [c for c in NUMERIC_FEATURES if c in df.columns]
    if not features:
        return _placeholder("No numeric features to plot")
    classes = sorted(df[target].dropna().unique().tolist())
    cols = 3
    rows = (len(features) + cols - 1) // cols

    fig = make_subplots(rows=rows, cols=cols, subplot_titles=features)
    for i, feature in enumerate(features):
        row, col = i // cols + 1, i % cols + 1
        for j, label in enumerate(classes):
            fig.add_trace(
                go.Box(
                    y=df.loc[df[target] == label, feature],
                    name=f"{target}={label}",
                    marker=dict(color=COLORS[j % len(COLORS)]),
                    legendgroup=str(label),
                    showlegend=(i == 0),
                ),
                row=row, col=col
            )

    fig.update_layout(
        title=f'Feature Distributions by {target}',
        height=320 * rows,
        margin=dict(l=50, r=50, t=80, b=50),
        font=dict(size=12),
        plot_bgcolor='rgba(0,0,0,0)',
        paper_bgcolor='rgba(0,0,0,0)',
    )
    return _to_html(fig, "boxplotChart")


def create_correlation_heatmap(df: pd.DataFrame, target: str = TARGET_COLUMN) -> str:
    """Correlation heatmap faceted by Target class."""
    if df.empty or target not in df.columns:
        return _placeholder("No data available for correlation heatmap")

    long = correlation_long(df, by=target)
    if long.empty:
        return _placeholder("Not enough numeric data for correlations")

    classes = sorted(long[target].unique().tolist())
    fig = make_subplots(
        rows=1, cols=len(classes),
        subplot_titles=[f"{target} = {label}" for label in classes],
        horizontal_spacing=0.12
    )
    for i, label in enumerate(classes):
        matrix = long[long[target] == label].pivot(index='Var1', columns='Var2', values='value')
        order = [c for c in df.columns if c in matrix.index]
        matrix = matrix.loc[order, order]
        fig.add_trace(
            go.Heatmap(
                z=matrix.values,
                x=list(matrix.columns),
                y=list(matrix.index),
                zmin=-1, zmax=1,
                colorscale='RdBu',
                reversescale=True,
                showscale=(i == len(classes) - 1),
                hovertemplate='%{y} / %{x}: %{z:.2f}<extra></extra>',
            ),
            row=1, col=i + 1
        )

    fig.update_layout(
        title='Feature Correlations by Class',
        height=520,
        margin=dict(l=80, r=50, t=80, b=80),
        font=dict(size=11),
        plot_bgcolor='rgba(0,0,0,0)',
        paper_bgcolor='rgba(0,0,0,0)',
    )
    return _to_html(fig, "correlationChart")


def create_model_comparison_chart(table: pd.DataFrame) -> str:
    """Grouped bars of every metric per model; undefined metrics are left out."""
    if table is None or table.empty:
        return _placeholder("No model performance data available")

    fig = go.Figure()
    for i, metric in enumerate(METRIC_COLUMNS):
        values = [None if is_undefined(v) else v for v in table[metric]]
        fig.add_trace(go.Bar(
            x=table['Model'].tolist(),
            y=values,
            name=metric,
            marker=dict(color=COLORS[i % len(COLORS)]),
            text=['' if v is None else f'{v:.3f}' for v in values],
            textposition='auto',
        ))

    fig.update_layout(
        title='Model Performance Comparison',
        xaxis_title='Models',
        yaxis_title='Score',
        yaxis=dict(range=[0, 1]),
        barmode='group',
        height=400,
        margin=dict(l=50, r=50, t=50, b=100),
        font=dict(size=12),
        plot_bgcolor='rgba(0,0,0,0)',
        paper_bgcolor='rgba(0,0,0,0)',
    )
    return _to_html(fig, "performanceChart")


def create_class_balance_chart(stats: Dict[str, Any]) -> str:
    """Bar chart of Target class counts from summarize_dataset output."""
    balance = (stats or {}).get('class_balance')
    if not balance:
        return _placeholder("No class balance information available")

    labels = list(balance.keys())
    values = list(balance.values())
    fig = go.Figure(data=[go.Bar(
        x=[f"{TARGET_COLUMN}={label}" for label in labels],
        y=values,
        marker=dict(color=COLORS[:len(labels)]),
        text=values,
        textposition='auto',
    )])

    fig.update_layout(
        title=f'Class Balance<br><sub>{sum(values):,} rows</sub>',
        xaxis_title='Class',
        yaxis_title='Count',
        height=350,
        font=dict(size=12),
        plot_bgcolor='rgba(0,0,0,0)',
        paper_bgcolor='rgba(0,0,0,0)',
        margin=dict(l=50, r=50, t=70, b=50)
    )
    return _to_html(fig, "balanceChart")
