# softraster

A small 3D renderer that does all of its work on the CPU. Meshes are made of
triangles. Each frame they are rotated, projected with a perspective matrix and
filled pixel by pixel into a frame buffer, with a depth buffer deciding which
triangle is in front. The finished frame is shown in a window through pygame.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
softraster [OBJ] [--width N] [--height N]
```

This opens a window and spins a mesh until the window is closed. Without `OBJ`
a unit cube is shown; with it, the mesh is read from that Wavefront OBJ file.
`--width` and `--height` set the window size in pixels (default 1280 x 720) and
must be positive.

The rotation advances by one radian per second of elapsed time about the z
axis, and half that about the x axis. The mesh is pushed back along z so that
its nearest point sits two units from the camera.

If the OBJ file holds a malformed vertex or face line, or the display cannot be
opened, the command prints a message to standard error and exits with status 1.
A file that cannot be opened at all gives an empty mesh and an empty window.

## Using the library

### Reading meshes

`softraster.objparser.parse_wavefront_file` reads a mesh from a Wavefront OBJ
file. Vertex lines (`v`) and face lines (`f`) are used; every other line is
ignored. Face indices start at 1 and may carry texture or normal indices after
a slash (`f 1/1/1 2/2/2 3/3/3`); only the vertex index is used, and only the
first three vertices of a face. A vertex with fewer than three coordinates, a
face with fewer than three vertices or an index out of range raises
`ValueError`.

```python
from softraster.objparser import parse_wavefront_file

mesh = parse_wavefront_file("model.obj")
print(len(mesh), "triangles")
```

The same parser also takes lines that are already in memory:

```python
from softraster.objparser import parse_wavefront_lines

mesh = parse_wavefront_lines([
    "v 0 0 0",
    "v 1 0 0",
    "v 0 1 0",
    "f 1 2 3",
])
```

A unit cube of 12 triangles comes with the package:

```python
from softraster.app import create_cube

cube = create_cube()
```

### Value types

`softraster.models` holds the plain types: `Float2`, `Float3`, `Int2Vec`,
`Int3Vec`, `Triangle` (three `Float3` points in `p`), `Mesh` (a list of
triangles in `tris`) and `BoundingBox`.

### Rendering without a window

`softraster.raster.Rasterizer` owns a pixel buffer (`pixels`, one packed ARGB
integer per pixel, row by row) and a depth buffer (`z_buffer`).

```python
from softraster.raster import Rasterizer, color_from_rgb

raster = Rasterizer(640, 480)
raster.render_mesh(cube, 0.5)

raster.clear()
raster.set_pixel(10, 10, color_from_rgb(255, 0, 0))
```

Besides `render_mesh`, it offers `fill_triangle`, `draw_triangle` (an outline),
`draw_line` (Bresenham, between two `Int2Vec` points) and `triangle_bounds`.
Pixels outside the screen are ignored. Colours are 32-bit ARGB integers with
the alpha channel set to full.

The matrix helpers `projection_matrix`, `rotation_z`, `rotation_x` and
`multiply_matrix_vector` work on `Matrix4`, a 4x4 matrix applied to row
vectors. `mesh_z_bounds` gives the z range of a mesh.

### Showing frames on screen

`softraster.engine.RenderEngine` opens a pygame window and shows the
rasterizer's frames. `initialize` raises `RuntimeError` if the display cannot
be opened. It can be used as a context manager:

```python
from softraster.engine import RenderEngine

with RenderEngine(1280, 720, "Viewer") as engine:
    angle = 0.0
    while not engine.should_close():
        engine.poll_events()
        angle += 1.0 * engine.elapsed_time
        engine.render_mesh(cube, angle)
```

`poll_events` handles the window's close event and sets `elapsed_time` to the
seconds since the previous call.

### Geometry helpers

`softraster.geometry` has `cross`, `point_on_right_side_of_line` and
`point_in_triangle`, the edge tests the rasterizer uses to decide whether a
pixel lies inside a triangle.

## What it does not do

Every triangle is filled in plain white: there is no lighting, shading,
texturing or back-face culling. Depth is tested with the nearest corner of
each triangle rather than interpolated per pixel. The window reacts only to
being closed; there is no keyboard or mouse control. Materials, normals and
texture coordinates in OBJ files are not read.