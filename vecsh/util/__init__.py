from vecsh.util.vector import Vector
