# renderer/kernels.py
# Compiled counterparts of geometry/ and renderer/shading.py. Scenes arrive
# flattened by renderer.scene_data.pack_scene; vectors are float64[3] arrays.

import math

import numpy as np
from numba import njit, prange

from geometry.plane import EPSILON
from renderer.scene_data import KIND_PLANE, KIND_SPHERE

NO_HIT = -1.0

SHADOW_NONE = 0
SHADOW_HARD = 1
SHADOW_SOFT = 2

@njit
def dot(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

@njit
def normalize_inplace(v):
    length = math.sqrt(dot(v, v))
    if length == 0.0:
        for i in range(3):
            v[i] = 0.0
        return
    for i in range(3):
        v[i] = v[i] / length

@njit
def reflect_into(out, i, n):
    """out = 2 (i . n) n - i"""
    d = 2.0 * dot(i, n)
    for k in range(3):
        out[k] = n[k] * d - i[k]

@njit
def hash_uniform(seed):
    """Stateless pseudo-random value in [0, 1) derived from a float seed."""
    x = math.sin(seed * 12.9898 + 78.233) * 43758.5453
    return x - math.floor(x)

@njit
def _finish_hit(origin, direction, t, out_point):
    for i in range(3):
        out_point[i] = origin[i] + direction[i] * t
    dx = out_point[0] - origin[0]
    dy = out_point[1] - origin[1]
    dz = out_point[2] - origin[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)

@njit
def intersect_sphere(origin, direction, params, out_point, out_normal):
    """Returns the hit distance, or NO_HIT. params = (cx, cy, cz, radius)."""
    radius = params[3]
    if not radius > 0.0:
        return NO_HIT

    lx = params[0] - origin[0]
    ly = params[1] - origin[1]
    lz = params[2] - origin[2]
    tca = lx * direction[0] + ly * direction[1] + lz * direction[2]
    if tca < 0.0:
        return NO_HIT

    d2 = lx * lx + ly * ly + lz * lz - tca * tca
    r2 = radius * radius
    if d2 > r2:
        return NO_HIT

    thc = math.sqrt(r2 - d2)
    t0 = tca - thc
    t1 = tca + thc
    if t0 > t1:
        t0, t1 = t1, t0
    if t0 < 0.0:
        t0 = t1
        if t0 < 0.0:
            return NO_HIT

    distance = _finish_hit(origin, direction, t0, out_point)
    for i in range(3):
        out_normal[i] = out_point[i] - params[i]
    normalize_inplace(out_normal)
    return distance

@njit
def intersect_plane(origin, direction, params, out_point, out_normal):
    """Returns the hit distance, or NO_HIT. params = (nx, ny, nz, offset)."""
    denom = (-params[0]) * direction[0] + (-params[1]) * direction[1] + (-params[2]) * direction[2]
    if denom <= EPSILON:
        return NO_HIT

    offset = params[3]
    px = params[0] * offset - origin[0]
    py = params[1] * offset - origin[1]
    pz = params[2] * offset - origin[2]
    t = (px * (-params[0]) + py * (-params[1]) + pz * (-params[2])) / denom
    if t < 0.0:
        return NO_HIT

    distance = _finish_hit(origin, direction, t, out_point)
    for i in range(3):
        out_normal[i] = params[i]
    return distance

@njit
def intersect(kind, params, origin, direction, out_point, out_normal):
    if kind == KIND_SPHERE:
        return intersect_sphere(origin, direction, params, out_point, out_normal)
    if kind == KIND_PLANE:
        return intersect_plane(origin, direction, params, out_point, out_normal)
    return NO_HIT

@njit
def nearest_hit(kinds, params, origin, direction, out_point, out_normal):
    """Index of the closest object hit by the ray (first wins ties), or -1."""
    point = np.empty(3)
    normal = np.empty(3)
    best = -1
    best_distance = 0.0
    for idx in range(kinds.shape[0]):
        distance = intersect(kinds[idx], params[idx], origin, direction, point, normal)
        if distance < 0.0:
            continue
        if best < 0 or distance < best_distance:
            best = idx
            best_distance = distance
            for k in range(3):
                out_point[k] = point[k]
                out_normal[k] = normal[k]
    return best

@njit
def occluded(kinds, params, origin, direction):
    point = np.empty(3)
    normal = np.empty(3)
    for idx in range(kinds.shape[0]):
        if intersect(kinds[idx], params[idx], origin, direction, point, normal) >= 0.0:
            return True
    return False

@njit
def light_factor(kinds, params, point, light_dir, shadow_mode, samples, jitter, seed):
    if shadow_mode == SHADOW_NONE:
        return 1.0
    if shadow_mode == SHADOW_HARD:
        if occluded(kinds, params, point, light_dir):
            return 0.0
        return 1.0

    direction = np.empty(3)
    blocked = 0
    for s in range(samples):
        for k in range(3):
            u = hash_uniform(seed + s * 3.0 + k)
            direction[k] = light_dir[k] + (2.0 * u - 1.0) * jitter
        normalize_inplace(direction)
        if occluded(kinds, params, point, direction):
            blocked += 1
    return 1.0 - blocked / samples

@njit
def camera_direction(x, y, width, height, view_plane_dist, rotation, out):
    view = np.empty(3)
    view[0] = x - width / 2.0
    view[1] = height / 2.0 - y
    view[2] = -view_plane_dist
    normalize_inplace(view)
    # Row vector times matrix, w = 0.
    for j in range(3):
        out[j] = view[0] * rotation[0, j] + view[1] * rotation[1, j] + view[2] * rotation[2, j]

@njit
def trace_pixel(eye, direction, kinds, params, colors, reflectivity,
                light, light_power, attenuation, shadow_mode, samples, jitter,
                shininess, specular_weight, reflect_view, max_depth, seed, out_color):
    """
    Iterative form of Shader.shade. Each bounce level stores its local color
    and reflectivity; the stack is then folded back to front with the same
    per-level clamp the recursive version applies on return.
    """
    levels = max_depth + 1
    local = np.zeros((levels, 3))
    refl = np.zeros(levels)

    origin = eye.copy()
    ray_dir = direction.copy()
    point = np.empty(3)
    normal = np.empty(3)
    light_dir = np.empty(3)
    reflection = np.empty(3)
    incoming = np.empty(3)

    count = 0
    for depth in range(levels):
        idx = nearest_hit(kinds, params, origin, ray_dir, point, normal)
        if idx < 0:
            break

        for k in range(3):
            light_dir[k] = light[k] - point[k]
        distance = math.sqrt(dot(light_dir, light_dir))
        normalize_inplace(light_dir)

        intensity = light_power
        if attenuation and distance > 0.0:
            intensity = intensity / distance
        intensity = intensity * light_factor(kinds, params, point, light_dir, shadow_mode,
                                             samples, jitter, seed + depth * samples * 3.0)

        diffuse = intensity * max(0.0, dot(normal, light_dir))
        reflect_into(reflection, light_dir, normal)
        for k in range(3):
            incoming[k] = -ray_dir[k]
        specular = intensity * max(0.0, dot(reflection, incoming)) ** shininess
        highlight = 255.0 * (specular * specular_weight)

        for k in range(3):
            local[count, k] = colors[idx, k] * diffuse + highlight
        refl[count] = reflectivity[idx]
        count += 1

        if not reflectivity[idx] > 0.0:
            break
        if reflect_view:
            reflect_into(ray_dir, incoming, normal)
        else:
            for k in range(3):
                ray_dir[k] = reflection[k]
        for k in range(3):
            origin[k] = point[k]

    for k in range(3):
        out_color[k] = 0.0
    for level in range(count - 1, -1, -1):
        r = refl[level]
        for k in range(3):
            c = local[level, k]
            if r > 0.0:
                c = c * (1.0 - r) + out_color[k] * r
            out_color[k] = min(255.0, max(0.0, c))

@njit
def levels_times_samples(max_depth, samples):
    """Seed stride per pixel: one slot per bounce level, sample and axis."""
    return (max_depth + 1) * samples * 3.0

@njit(parallel=True)
def render_kernel(width, height, eye, rotation, view_plane_dist,
                  kinds, params, colors, reflectivity,
                  light, light_power, attenuation, shadow_mode, samples, jitter,
                  shininess, specular_weight, reflect_view, max_depth, seed, output):
    """
    Fills output[y, x] with the clamped float color of every pixel.
    Rows are independent and run in parallel.
    """
    for y in prange(height):
        direction = np.empty(3)
        color = np.empty(3)
        for x in range(width):
            camera_direction(x, y, width, height, view_plane_dist, rotation, direction)
            pixel_seed = ((float(seed) * height + y) * width + x) * levels_times_samples(max_depth, samples)
            trace_pixel(eye, direction, kinds, params, colors, reflectivity,
                        light, light_power, attenuation, shadow_mode, samples, jitter,
                        shininess, specular_weight, reflect_view, max_depth, pixel_seed, color)
            for k in range(3):
                output[y, x, k] = color[k]
