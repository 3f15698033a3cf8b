"""
どこで: `kaleido.engine.render.shader`
何を: ストローク用（線分 → 太さ付き四角形、円形クリップ）と塗り用（ビニール円盤）の GLSL プログラムを生成。
なぜ: GL の線幅指定は実装依存のため、ジオメトリシェーダで太さを展開し、クリップもフラグメントで行うため。

座標系:
- 頂点はキャンバス中心基準の画素座標（y 下向き）。
- `half_size` = (幅/2, 高さ/2) で割ってクリップ空間へ写す（y は反転）。
"""

from __future__ import annotations

from typing import Any

_STROKE_VERTEX = """
#version 330
in vec2 in_vert;
in vec4 in_color;
in float in_width;
out vec2 v_pos;
out vec4 v_color;
out float v_width;
void main() {
    v_pos = in_vert;
    v_color = in_color;
    v_width = in_width;
}
"""

_STROKE_GEOMETRY = """
#version 330
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
in vec2 v_pos[];
in vec4 v_color[];
in float v_width[];
out vec2 g_pos;
out vec4 g_color;
uniform vec2 half_size;

void emit_at(vec2 p, vec4 c) {
    g_pos = p;
    g_color = c;
    gl_Position = vec4(p.x / half_size.x, -p.y / half_size.y, 0.0, 1.0);
    EmitVertex();
}

void main() {
    vec2 a = v_pos[0];
    vec2 b = v_pos[1];
    vec2 d = b - a;
    float len = length(d);
    vec2 dir = len > 1e-6 ? d / len : vec2(1.0, 0.0);
    float hw = max(v_width[0], 0.5) * 0.5;
    vec2 n = vec2(-dir.y, dir.x) * hw;
    vec2 ext = dir * hw;
    emit_at(a - ext + n, v_color[0]);
    emit_at(a - ext - n, v_color[0]);
    emit_at(b + ext + n, v_color[1]);
    emit_at(b + ext - n, v_color[1]);
    EndPrimitive();
}
"""

_STROKE_FRAGMENT = """
#version 330
in vec2 g_pos;
in vec4 g_color;
out vec4 f_color;
uniform float clip_radius;
void main() {
    if (length(g_pos) > clip_radius) {
        discard;
    }
    f_color = g_color;
}
"""

_FILL_VERTEX = """
#version 330
in vec2 in_vert;
uniform vec2 half_size;
void main() {
    gl_Position = vec4(in_vert.x / half_size.x, -in_vert.y / half_size.y, 0.0, 1.0);
}
"""

_FILL_FRAGMENT = """
#version 330
out vec4 f_color;
uniform vec4 color;
void main() {
    f_color = color;
}
"""


class Shader:
    """GLSL プログラムのファクトリ。"""

    @staticmethod
    def create_stroke_shader(ctx: Any) -> Any:
        return ctx.program(
            vertex_shader=_STROKE_VERTEX,
            geometry_shader=_STROKE_GEOMETRY,
            fragment_shader=_STROKE_FRAGMENT,
        )

    @staticmethod
    def create_fill_shader(ctx: Any) -> Any:
        return ctx.program(vertex_shader=_FILL_VERTEX, fragment_shader=_FILL_FRAGMENT)


__all__ = ["Shader"]
