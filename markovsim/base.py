import abc
from collections import defaultdict
from inspect import signature
from typing import Optional

import numpy as np
from sklearn.base import BaseEstimator


class _BaseMethodsMixin(BaseEstimator, abc.ABC):
    """ Defines common methods used by both Estimator and Model classes. Parameters are the constructor
    arguments, stored under the same name as attributes. The representation is scikit-learn's, listing the
    parameters which differ from their defaults.
    """

    def get_params(self, deep=False):
        r"""Get the parameters.

        Returns
        -------
        params : mapping of string to any
            Parameter names mapped to their values.
        """
        params = dict()

        # introspect the constructor arguments to find the model parameters
        cls = self.__class__
        init_sign = signature(cls.__init__)
        args, varargs = [], []
        for parameter in init_sign.parameters.values():
            if parameter.kind != parameter.VAR_KEYWORD and parameter.name != 'self':
                args.append(parameter.name)
            if parameter.kind == parameter.VAR_POSITIONAL:
                varargs.append(parameter.name)

        if len(varargs) != 0:
            raise RuntimeError("markovsim models and estimators should always specify their parameters in the "
                               "signature of their __init__ (no varargs). %s doesn't follow this convention."
                               % (cls,))
        for arg in args:
            params[arg] = getattr(self, arg, None)
        return params

    def set_params(self, **params):
        """
        Set the parameters of this object.

        Nested objects are addressed with parameters of the form ``<component>__<parameter>``.

        Parameters
        ----------
        **params : dict
            Parameters.

        Returns
        -------
        self : object
            Instance with updated parameters.
        """
        if not params:
            return self
        valid_params = self.get_params(deep=True)

        nested_params = defaultdict(dict)  # grouped by prefix
        for key, value in params.items():
            key, delim, sub_key = key.partition('__')
            if key not in valid_params:
                raise ValueError('Invalid parameter %s for %s. '
                                 'Check the list of available parameters '
                                 'with `get_params().keys()`.' % (key, self))

            if delim:
                nested_params[key][sub_key] = value
            else:
                setattr(self, key, value)
                valid_params[key] = value

        for key, sub_params in nested_params.items():
            valid_params[key].set_params(**sub_params)

        return self


class Model(_BaseMethodsMixin):
    r""" The model superclass. """

    def copy(self) -> "Model":
        r""" Makes a deep copy of this model.

        Returns
        -------
        copy
            A new copy of this model.
        """
        import copy
        return copy.deepcopy(self)


class Estimator(_BaseMethodsMixin):
    r""" Base class of all estimators. Estimators produce a :class:`Model` from a transition matrix.

    Parameters
    ----------
    model : Model, optional, default=None
        A model which can be used for initialization.
    """

    def __init__(self, model=None):
        self._model = model

    @abc.abstractmethod
    def fit(self, data, **kwargs):
        r""" Fits data to the estimator's internal :class:`Model` and overwrites it. This way, every call to
        :meth:`fetch_model` yields an autonomous model instance.

        Parameters
        ----------
        data : array_like
            Data that is used to fit a model.
        **kwargs
            Additional kwargs.

        Returns
        -------
        self : Estimator
            Reference to self.
        """

    def fetch_model(self) -> Optional[Model]:
        r""" Yields the estimated model. Can be None if :meth:`fit` was not called.

        Returns
        -------
        model : Model or None
            The estimated model or None.
        """
        return self._model

    def fit_fetch(self, data, **kwargs):
        r""" Fits the internal model on data and subsequently fetches it in one call.

        Parameters
        ----------
        data : array_like
            Data that is used to fit the model.
        **kwargs
            Additional arguments to :meth:`fit`.

        Returns
        -------
        model
            The estimated model.
        """
        self.fit(data, **kwargs)
        return self.fetch_model()

    @property
    def model(self):
        """ Shortcut to :meth:`fetch_model`. """
        return self.fetch_model()

    @property
    def has_model(self) -> bool:
        r""" Property reporting whether this estimator contains an estimated model.

        :type: bool
        """
        return self._model is not None

    def __getattribute__(self, item):
        if item == 'fit':
            fit = super(Estimator, self).__getattribute__(item)
            return _ImmutableInputData(fit)

        return super(_BaseMethodsMixin, self).__getattribute__(item)


class _ImmutableInputData:
    """A function decorator for Estimator.fit() which makes ndarray input read-only for the duration of the fit. """

    def __init__(self, fit_method):
        self.fit_method = fit_method
        self.data = []
        self.old_writable_flags = []

    def __enter__(self):
        self.old_writable_flags = []
        for d in self.data:
            self.old_writable_flags.append(d.flags.writeable)
            d.setflags(write=False)

    def __exit__(self, exc_type, exc_val, exc_tb):
        # restore ndarray writable flags to old state
        for d, writable in zip(self.data, self.old_writable_flags):
            if writable:
                d.setflags(write=True)

    def __call__(self, *args, **kwargs):
        value = args[0] if len(args) > 0 else kwargs.get('data')
        # only arrays that own their memory can have their write flag restored
        self.data = [value] if isinstance(value, np.ndarray) and value.flags.owndata else []

        with self:
            return self.fit_method(*args, **kwargs)
