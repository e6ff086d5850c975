class _NullProgress:
    r""" Progress bar that only counts, used when a run is not given one. """

    def __init__(self, total=None, **_):
        self.total = total
        self.n = 0

    def update(self, inc=1):
        self.n += inc

    def close(self):
        pass

    def set_description(self, *_):
        pass


def handle_progress_bar(progress):
    r""" Resolves the progress bar class of a run.

    Parameters
    ----------
    progress : class or None
        A tqdm-compatible progress bar class.

    Returns
    -------
    progress_bar : class
        `progress`, or a counting no-op bar if it was None.
    """
    return _NullProgress if progress is None else progress


def supports_progress_interface(bar):
    r""" Method to check if a progress bar supports the markovsim interface, meaning that it
    has `update`, `close`, and `set_description` methods as well as an `n` attribute.

    Parameters
    ----------
    bar : object, optional
        The progress bar implementation to check, can be None.

    Returns
    -------
    supports : bool
        Whether the progress bar is supported.

    See Also
    --------
    ProgressCallback
    """
    has_methods = all(callable(getattr(bar, method, None)) for method in supports_progress_interface.required_methods)
    has_attributes = all(hasattr(bar, attribute) for attribute in supports_progress_interface.required_attributes)
    return has_methods and has_attributes


supports_progress_interface.required_methods = ['update', 'close', 'set_description']
supports_progress_interface.required_attributes = ['n']


class ProgressCallback:
    r"""Callback which advances a progress bar once per simulation step.

    Parameters
    ----------
    progress : object
       Tested for a tqdm progress bar. Should implement `update()`, `set_description()`, and `close()`. Should
       also possess a `total` constructor keyword argument.
    total : int
       Number of steps to completion.
    description : string
       text to display in front of the progress bar.

    See Also
    --------
    supports_progress_interface
    """

    def __init__(self, progress, description=None, total=None):
        self.progress_bar = handle_progress_bar(progress)(total=total)
        self.total = total
        self.set_description(description)

        assert supports_progress_interface(self.progress_bar), \
            f"Progress bar did not satisfy interface! It should at least have " \
            f"the method(s) {supports_progress_interface.required_methods} and " \
            f"the attribute(s) {supports_progress_interface.required_attributes}."

    def __call__(self, inc=1, *args, **kw):
        self.progress_bar.update(inc)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress_bar.close()

    def set_description(self, value):
        self.progress_bar.set_description(value)


class StepProgressCallback(ProgressCallback):
    r"""Progress callback which additionally shows the current simulation step in the description.

    Notes
    -----
    The step index needs to be passed to `__call__()` as keyword argument `step`.

    See Also
    --------
    ProgressCallback
    """

    def __init__(self, progress, description=None, total=None):
        super().__init__(progress, description, total)
        self.description = description

    def __call__(self, inc=1, *args, **kw):
        super().__call__(inc)
        if 'step' in kw:
            super().set_description("{} - [t={}]".format(self.description, kw.get('step')))
