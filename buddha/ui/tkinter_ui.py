import threading
import time
import tkinter as tk
from contextlib import contextmanager
from dataclasses import replace

import numpy as np
from PIL import Image, ImageTk

from buddha.buddhabrot.controller import BuddhabrotController, RenderState
from buddha.buddhabrot.opencl.buddhabrot_cl import PY_OPEN_CL_INSTALLED
from buddha.ui.colouring import to_image
from buddha.utils.buddhabrot_utils import BuddhabrotConfig, make_cli_args, my_logger


@contextmanager
def temp_disable(parent):
    widgets_set = set_state_recursive(enumerate_leaves(parent), tk.NORMAL, tk.DISABLED)
    try:
        yield
    finally:
        set_state_recursive(widgets_set, tk.DISABLED, tk.NORMAL)


def enumerate_leaves(parent):
    if parent.winfo_class() in ('Frame', 'Labelframe'):
        out = []
        for child in parent.winfo_children():
            out += enumerate_leaves(child)
        return out
    return [parent]


def set_state_recursive(widgets, state_from, state_to):
    out = []
    for widget in widgets:
        states = widget.config().get('state')
        if states is None or state_from in states:
            widget.configure(state=state_to)
            out.append(widget)
    return out


class FractalUI(tk.Frame):
    def __init__(self, parent, config: BuddhabrotConfig):
        tk.Frame.__init__(self, parent)
        self.parent = parent
        self.parent.title("Buddhabrot")

        self.controller = BuddhabrotController(config)
        self.computing = False

        ###########################################################################################

        self.control_panel = tk.Frame(self)
        self.control_panel.pack(side=tk.RIGHT, fill=tk.Y)

        compute_controls = tk.Frame(self.control_panel)
        gpu_controls = tk.LabelFrame(self.control_panel)
        panel_padding = 7
        compute_controls.pack(side=tk.TOP, fill=tk.X, pady=panel_padding)
        gpu_controls.pack(side=tk.TOP, fill=tk.X, pady=panel_padding)

        ###########################################################################################

        iterations_frame = tk.LabelFrame(compute_controls, text="Max Iterations")
        self.max_iterations = tk.StringVar(value=config.max_iterations)
        iter_entry = tk.Entry(iterations_frame, textvariable=self.max_iterations, width=13)

        samples_frame = tk.LabelFrame(compute_controls, text="Samples")
        self.num_samples = tk.StringVar(value=config.num_samples)
        samples_entry = tk.Entry(samples_frame, textvariable=self.num_samples, width=13)

        for entry in [iter_entry, samples_entry]:
            entry.pack(fill=tk.X)
            entry.bind("<Return>", lambda _: self.on_config_submit())

        other = tk.Frame(compute_controls)
        tk.Button(other, command=self.recompute, text="recompute").pack(side=tk.LEFT)
        tk.Button(other, command=self.copy_cli, text="copy CLI").pack(side=tk.RIGHT)
        other.pack(side=tk.TOP, pady=5)

        iterations_frame.pack(side=tk.TOP, fill=tk.X)
        samples_frame.pack(side=tk.TOP, fill=tk.X)

        ###########################################################################################

        self.gpu = tk.BooleanVar(value=config.gpu and PY_OPEN_CL_INSTALLED)
        tk.Checkbutton(
            gpu_controls,
            text="gpu",
            variable=self.gpu,
            state=tk.NORMAL if PY_OPEN_CL_INSTALLED else tk.DISABLED,
            command=self.on_config_submit,
        ).grid(sticky=tk.W)

        ###########################################################################################

        self.image_canvas = tk.Canvas(self, width=config.image_size, height=config.image_size)
        self.image_canvas.pack(side=tk.LEFT, expand=True, fill=tk.BOTH)
        self.canvas_image = None
        self.image = None

        ###########################################################################################

        self.pack(fill=tk.BOTH, expand=True)
        self.compute_and_draw()

    def copy_cli(self):
        self.parent.clipboard_clear()
        self.parent.clipboard_append(make_cli_args(self.controller.config))

    def read_config(self):
        config = self.controller.config
        self.max_iterations.set(config.max_iterations)
        self.num_samples.set(config.num_samples)
        self.gpu.set(config.gpu)

    def write_config(self):
        try:
            config = replace(
                self.controller.config,
                max_iterations=int(self.max_iterations.get()),
                num_samples=int(self.num_samples.get()),
                gpu=self.gpu.get(),
            )
        except ValueError as e:
            my_logger.warning(f"invalid configuration: {e}")
            self.read_config()
            return False

        if config != self.controller.config:
            self.controller.set_config(config)
        return True

    def on_config_submit(self):
        if self.write_config():
            self.compute_and_draw()

    def recompute(self):
        self.controller.invalidate()
        self.compute_and_draw()

    def compute_and_draw(self):
        if self.computing:
            return
        threading.Thread(target=self.threaded_compute_and_draw).start()

    def threaded_compute_and_draw(self):
        with temp_disable(self.control_panel):
            self.computing = True
            my_logger.info("-" * 80)
            start = time.time()
            try:
                if self.controller.state is RenderState.FRESH:
                    return
                self.draw(self.controller.get_image())
            finally:
                duration = time.time() - start
                my_logger.info("computation took {} seconds".format(round(duration, 2)))
                my_logger.info("-" * 80)
                self.computing = False

    def set_image(self, image):
        shape = self.image_canvas.winfo_width(), self.image_canvas.winfo_height()
        if (image.width, image.height) != shape and min(shape) > 1:
            image = image.resize(shape, resample=Image.BOX)
        self.image = image
        tk_image = ImageTk.PhotoImage(image)
        if self.canvas_image is None:
            self.canvas_image = self.image_canvas.create_image(
                0, 0, image=tk_image, anchor=tk.NW
            )
        else:
            self.image_canvas.itemconfig(self.canvas_image, image=tk_image)
        self.image_canvas.image = tk_image

    def draw(self, intensity: np.ndarray):
        self.set_image(to_image(intensity))


def run(config: BuddhabrotConfig):
    root = tk.Tk()
    FractalUI(parent=root, config=config)
    root.geometry("{}x{}".format(config.image_size + 160, config.image_size))
    root.mainloop()
